from datlens.cli.main import main

raise SystemExit(main())
