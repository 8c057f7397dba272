from calc.repl.cli import main

raise SystemExit(main())
