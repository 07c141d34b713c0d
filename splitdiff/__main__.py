import sys

from splitdiff.main import main

sys.exit(main())
