import pytest

from repo_audit.errors import VcsError
from repo_audit.rules.branch_name import BranchNameCheck, is_valid_branch_name


@pytest.mark.parametrize(
    "branch",
    ["main", "master", "develop", "HEAD", "feature/add-login", "fix/issue-42", "release/v2", "docs/a"],
)
def test_valid_branch_names(branch):
    assert is_valid_branch_name(branch)


@pytest.mark.parametrize(
    "branch",
    ["wip-stuff", "feature/", "feature/-leading", "feature/trailing-", "feat/add-login", "feature/add_login", "feature/a/b"],
)
def test_invalid_branch_names(branch):
    assert not is_valid_branch_name(branch)


def test_branch_check_reports_violation_without_line():
    result = BranchNameCheck().evaluate("wip-stuff")

    assert not result.passed
    assert result.violations[0].line is None
    assert result.violations[0].message == "Invalid branch name: wip-stuff"


def test_branch_check_queries_git_when_no_name_given():
    assert BranchNameCheck(branch_lookup=lambda: "main").evaluate().passed
    assert not BranchNameCheck(branch_lookup=lambda: "wip-stuff").evaluate().passed


def test_branch_lookup_failure_propagates():
    def broken_lookup():
        raise VcsError("git executable not found")

    with pytest.raises(VcsError):
        BranchNameCheck(branch_lookup=broken_lookup).evaluate()
