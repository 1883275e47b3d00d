from xcforge.cli import main

raise SystemExit(main())
