from jsontoxlsx.cli import app

app(prog_name="json-to-xlsx")
