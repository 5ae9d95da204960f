from probe_server.cli import main

raise SystemExit(main())
