from __future__ import annotations

from adbridge.cli import main

raise SystemExit(main())
