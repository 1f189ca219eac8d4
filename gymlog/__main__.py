import os

from . import create_app


def main() -> None:
    app = create_app()
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "4000"))
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()
