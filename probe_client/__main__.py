from probe_client.cli import main

raise SystemExit(main())
