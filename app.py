import os

from docbridge import create_app

app = create_app(os.environ.get("FLASK_ENV", "default"))


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5000")))
