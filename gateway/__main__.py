# =============================================================================
# gateway/__main__.py - CLI Entry Point
# =============================================================================
# Usage:
#   python -m gateway
#   PORT=8080 NODE_ENV=production python -m gateway
# =============================================================================

from gateway.server import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
