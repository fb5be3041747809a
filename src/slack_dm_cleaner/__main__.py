"""Entry-point para execução do slack-dm-cleaner."""

from slack_dm_cleaner.cli import cli_entry

if __name__ == "__main__":
    cli_entry()
