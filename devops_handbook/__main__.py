import sys

from .handbook_app import main

sys.exit(main())
