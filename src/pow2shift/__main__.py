from pow2shift.cli import main

raise SystemExit(main())
