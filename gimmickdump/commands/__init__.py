"""CLI subcommands for gimmickdump."""
