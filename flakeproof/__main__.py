# flakeproof/__main__.py
from flakeproof.cli.main import main

raise SystemExit(main())
