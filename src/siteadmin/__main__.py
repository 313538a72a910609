"""siteadmin entrypoint.

Run with:
  python -m siteadmin
"""

import uvicorn

from siteadmin.config import Settings

def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "siteadmin.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )

if __name__ == "__main__":
    main()
