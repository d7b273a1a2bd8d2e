"""Run the API key injector from a source checkout."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from injector.cli import (  # noqa: E402  # pylint: disable=wrong-import-position
    main,
)

if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
