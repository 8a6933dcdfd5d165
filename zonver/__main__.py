from zonver.cli import main

raise SystemExit(main())
