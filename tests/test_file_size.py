from repo_audit.config import AuditConfig, FilesConfig
from repo_audit.rules.file_size import FileSizeCheck, file_size_check, is_build_output
from repo_audit.ignore import IgnorePredicate


def test_size_boundary(tmp_path):
    at_limit = tmp_path / "at_limit.bin"
    at_limit.write_bytes(b"x" * 100)
    over_limit = tmp_path / "over_limit.bin"
    over_limit.write_bytes(b"x" * 101)

    result = FileSizeCheck(100, IgnorePredicate()).evaluate([str(at_limit), str(over_limit)])

    assert [v.file for v in result.violations] == [str(over_limit)]
    assert result.violations[0].message == "File size 101 bytes exceeds limit of 100 bytes"
    assert result.violations[0].line is None


def test_default_limit_is_500_kib(tmp_path):
    big = tmp_path / "big.bin"
    big.write_bytes(b"\0" * (500 * 1024 + 1))

    result = file_size_check(AuditConfig()).evaluate([str(big)])

    assert not result.passed


def test_missing_build_output_and_excluded_paths_are_skipped(tmp_path):
    config = AuditConfig(files=FilesConfig(max_size_bytes=1, exclude_paths=("fixtures",)))
    fixture = tmp_path / "fixtures" / "large.txt"
    fixture.parent.mkdir()
    fixture.write_text("plenty of bytes", encoding="utf-8")

    result = file_size_check(config).evaluate([str(tmp_path / "gone.txt"), str(fixture), "target/release/app"])

    assert result.passed


def test_is_build_output():
    assert is_build_output("target/debug/audit")
    assert is_build_output("tools/audit/target/release/audit")
    assert not is_build_output("src/targets.rs")
