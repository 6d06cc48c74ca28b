"""Allow ``python -m service_handler``."""

import sys

from service_handler.main import main

if __name__ == "__main__":
    sys.exit(main())
