"""Allow ``python -m usecase_mcp_server``."""

from usecase_mcp_server.main import main

raise SystemExit(main())
