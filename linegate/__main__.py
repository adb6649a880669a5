from linegate.main import app

app(prog_name="linegate")
