"""Allow ``python -m saavn_artists.cli`` execution (runs the search CLI)."""

import sys

from saavn_artists.cli.search import main

sys.exit(main())
