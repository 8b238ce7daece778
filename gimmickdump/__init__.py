"""gimmickdump - extract the gimmick descriptor table from Dolphin RAM dumps."""
