"""Product catalog administration.

Server-rendered product management with admin-only mutations: FastAPI routes,
SQLModel persistence, Jinja2 views and a small management CLI.
"""

__version__ = "0.1.0"
