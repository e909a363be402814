import sys

from tick_rps.cli import main

sys.exit(main())
