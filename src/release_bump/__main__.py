from release_bump.cli.app import app

app()
