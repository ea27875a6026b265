from ws_echo.cli import main

raise SystemExit(main())
