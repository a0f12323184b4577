import sys

from .interactive import main

sys.exit(main())
