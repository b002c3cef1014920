from __future__ import annotations
from flask import Flask

def register_routes(app: Flask) -> None:
    from .auth import auth_bp
    from .jobs import jobs_bp
    from .resumes import resumes_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(resumes_bp)
