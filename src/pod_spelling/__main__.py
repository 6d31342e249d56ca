from pod_spelling.cli import app

app(prog_name="pod-spelling")
