"""Allow ``python -m sql_gateway``."""

from sql_gateway.api.main import run

if __name__ == "__main__":
    run()
