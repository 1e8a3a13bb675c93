import pytest

from distrike.matcher import Matcher, match_pattern
from distrike.prey import PreyKind, Risk
from distrike.rules_linux import linux_rules


def _by_pattern():
    return {rule.pattern: rule for rule in linux_rules()}


def test_all_rules_target_linux():
    rules = linux_rules()
    assert rules
    assert all(rule.platform == "linux" for rule in rules)


def test_patterns_are_unique():
    patterns = [rule.pattern for rule in linux_rules()]
    assert len(patterns) == len(set(patterns))


def test_command_actions_run_in_bash():
    for rule in linux_rules():
        if rule.action.type == "command":
            assert rule.action.command
            assert rule.action.shell == "bash"
        else:
            assert rule.action.type == "manual"
            assert rule.action.hint


def test_apt_rule_values():
    rule = _by_pattern()["/var/cache/apt"]
    assert rule.kind == PreyKind.CACHE
    assert rule.risk == Risk.SAFE
    assert rule.action.command == "sudo apt clean"


def test_pycache_is_cosmetic():
    rule = _by_pattern()["*/__pycache__"]
    assert rule.cosmetic is True
    assert _by_pattern()["/var/cache/apt"].cosmetic is False


def test_docker_overlay_needs_caution():
    rule = _by_pattern()["/var/lib/docker/overlay2"]
    assert rule.risk == Risk.CAUTION
    assert rule.action.command == "docker system prune -af"


def test_runtime_detect_rule_never_matches_paths():
    rule = _by_pattern()["__runtime_detect__orphan_packages"]
    assert rule.kind == PreyKind.ORPHAN
    assert match_pattern("/home/u/__runtime_detect__orphan_packages", rule.pattern) is False


def test_fresh_list_each_call():
    first = linux_rules()
    first.clear()
    assert linux_rules()


@pytest.mark.parametrize(
    "path, pattern",
    [
        ("/home/u/.cache/pip", "*/.cache/pip"),
        ("/home/u/.mozilla/firefox/abc.default/cache2", "*/.mozilla/firefox/*/cache2"),
        ("/home/u/.local/share/Trash", "*/.local/share/Trash"),
        ("/var/cache/apt", "/var/cache/apt"),
    ],
)
def test_matcher_picks_expected_rule(path, pattern):
    matcher = Matcher(rules=linux_rules())
    rule = matcher.match_rule(path)
    assert rule is not None
    assert rule.pattern == pattern


def test_unrelated_path_matches_nothing():
    matcher = Matcher(rules=linux_rules())
    assert matcher.match_rule("/home/u/projects/report.txt") is None