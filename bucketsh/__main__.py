from bucketsh.cli import app

app(prog_name="bsh")
