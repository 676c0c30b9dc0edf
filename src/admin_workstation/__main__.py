"""Entry point for ``python -m admin_workstation``."""

from __future__ import annotations

from admin_workstation.app import main

if __name__ == "__main__":
    main()
