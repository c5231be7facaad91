# run.py
"""
run.py
Development / intranet launcher for the parts portal.
Production deployments point a WSGI server at portal.app_factory:create_app.
"""
import os

from portal.app_factory import create_app


def main():
    # 1. build the app (creates the database handle and bootstraps tables)
    app = create_app()

    print("DB URI:", app.extensions["database"].engine.url)
    print("Parts root:", app.config["PARTS_ROOT"])

    # 2. server options
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    # 3. serve
    app.run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    main()
