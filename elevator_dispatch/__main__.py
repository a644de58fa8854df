import sys

from elevator_dispatch.cli import main

sys.exit(main())
