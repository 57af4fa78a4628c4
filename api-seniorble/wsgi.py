# wsgi.py
# gunicorn -k eventlet -w 1 wsgi:app  (pip install ".[deploy]")
import eventlet

# ✅ PRECISA ser o primeiro comando do arquivo
eventlet.monkey_patch()

from app.main import create_app  # noqa: E402

app = create_app()
