"""
PowerTrack - default configuration
----------------------------------
Loaded first by ``create_app`` via ``app.config.from_object``.

Local or sensitive settings belong in ``instance/config.py`` (same keys),
which is read afterwards with ``from_pyfile("config.py", silent=True)`` and
overrides everything here.
"""

# ⚙️ Flask-Grundeinstellungen
SECRET_KEY = "dev"                  # override in instance/config.py for production!
TESTING = False

# 💾 Datenbankpfad; None -> <instance_path>/powertrack.db
DATABASE = None

# 📈 Wochenfortschritt
WEEKLY_GOAL = 7                     # workouts per week for 100 %
WINDOW_DAYS = 7                     # trailing window for counts and averages

# Level for app.logger
LOG_LEVEL = "INFO"
