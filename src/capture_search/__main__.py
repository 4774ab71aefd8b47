from capture_search.cli import main

raise SystemExit(main())
