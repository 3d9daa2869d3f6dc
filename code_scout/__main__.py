from code_scout.cli import cli

cli(prog_name="code-scout")
