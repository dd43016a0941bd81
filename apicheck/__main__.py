import sys

from apicheck.cli import main

sys.exit(main())
