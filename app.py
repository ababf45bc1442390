"""
PowerTrack - weekly workout and health-metrics tracker
------------------------------------------------------
Development entry point:

    flask --app powertrack init-db
    python app.py

Production servers should import ``create_app`` from ``powertrack`` directly.
"""

from powertrack import create_app

app = create_app()


if __name__ == "__main__":
    with app.app_context():
        from powertrack.db import init_db
        init_db()  # create tables if missing
    app.logger.info("PowerTrack running with database %s", app.config["DATABASE"])
    app.run(debug=True)
