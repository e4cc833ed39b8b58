import sys

from erst.cli.main import main

sys.exit(main())
