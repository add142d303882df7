from __future__ import annotations

import sys

from inventory_service.cli import main


sys.exit(main())
