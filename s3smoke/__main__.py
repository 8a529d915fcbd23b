from s3smoke.cli import main

raise SystemExit(main())
