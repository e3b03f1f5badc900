import sys

from permitrack.main import main

sys.exit(main())
