"""
BloodLink - Donor Registry
Run with ``python app.py`` or ``flask --app app run``.
"""
from logging.config import dictConfig

from bloodlink import create_app

dictConfig({
    'version': 1,
    'formatters': {'default': {
        'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
    }},
    'handlers': {'wsgi': {
        'class': 'logging.StreamHandler',
        'stream': 'ext://flask.logging.wsgi_errors_stream',
        'formatter': 'default'
    }},
    'root': {
        'level': 'INFO',
        'handlers': ['wsgi']
    }
})

app = create_app()

# ============== MAIN ==============

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
