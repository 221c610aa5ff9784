from depthcrawler.cli import main

raise SystemExit(main())
