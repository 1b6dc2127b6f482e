from __future__ import annotations

from filegate.scripts.add_user import main


def test_creates_user_and_storage(app_config, storage_root, capsys):
    assert main(["alice", "s3cret"], config=app_config) == 0

    out = capsys.readouterr().out
    assert "Created user 'alice' with ID = 1" in out
    assert (storage_root / "1").is_dir()


def test_duplicate_login_fails(app_config, capsys):
    main(["alice", "s3cret"], config=app_config)

    assert main(["alice", "other"], config=app_config) == 1
    assert "user_already_exists" in capsys.readouterr().err
