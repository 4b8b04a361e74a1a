import sys

from petrisim.cli import main

sys.exit(main())
