import os

from rvsix.fileutils import kill_main, ln_main, mkdir_main, rm_main


def test_kill_usage(capsys):
    assert kill_main([]) == 1
    assert capsys.readouterr().err == "usage: kill pid...\n"


def test_kill_ignores_non_pids_and_missing_processes():
    assert kill_main(["0", "abc", "99999999"]) == 0
    assert os.getpid() > 0


def test_ln_usage(capsys):
    assert ln_main(["only"]) == 1
    assert capsys.readouterr().err == "Usage: ln old new\n"


def test_ln_creates_hard_link(tmp_path):
    old = tmp_path / "old"
    old.write_bytes(b"data")
    new = tmp_path / "new"
    assert ln_main([str(old), str(new)]) == 0
    assert os.path.samefile(old, new)


def test_ln_failure_reported(tmp_path, capsys):
    old = str(tmp_path / "missing")
    new = str(tmp_path / "new")
    assert ln_main([old, new]) == 0
    assert capsys.readouterr().err == f"link {old} {new}: failed\n"
    assert not os.path.exists(new)


def test_mkdir_usage(capsys):
    assert mkdir_main([]) == 1
    assert capsys.readouterr().err == "Usage: mkdir files...\n"


def test_mkdir_creates_directories(tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    assert mkdir_main([str(a), str(b)]) == 0
    assert a.is_dir() and b.is_dir()


def test_mkdir_stops_at_first_failure(tmp_path, capsys):
    existing = tmp_path / "exists"
    existing.mkdir()
    later = tmp_path / "later"
    assert mkdir_main([str(existing), str(later)]) == 0
    assert capsys.readouterr().err == f"mkdir: {existing} failed to create\n"
    assert not later.exists()


def test_rm_usage(capsys):
    assert rm_main([]) == 1
    assert capsys.readouterr().err == "Usage: rm files...\n"


def test_rm_removes_files_and_empty_directories(tmp_path):
    f = tmp_path / "f"
    f.write_bytes(b"x")
    d = tmp_path / "d"
    d.mkdir()
    assert rm_main([str(f), str(d)]) == 0
    assert not f.exists() and not d.exists()


def test_rm_stops_at_first_failure(tmp_path, capsys):
    missing = tmp_path / "missing"
    keep = tmp_path / "keep"
    keep.write_bytes(b"x")
    assert rm_main([str(missing), str(keep)]) == 0
    assert capsys.readouterr().err == f"rm: {missing} failed to delete\n"
    assert keep.exists()