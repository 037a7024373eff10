"""Run the appointment book on the local development server."""

from salon_app import APP_HOST, APP_PORT, create_app


def main() -> None:
    app = create_app()
    app.run(host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
