from app.konnect import create_app

app = create_app()
