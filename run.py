"""
Console entry point:  uvicorn run:app
"""

from wmsconsole.app import create_app

app = create_app()
