"""Tests for crate source retention."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import RecordingLogger, fail_rmtree_at, make_crate_source

from cargo_cache.exceptions import MalformedPackageNameError
from cargo_cache.services.pruner import group_by_package, parse_source_entry, prune


def _names(registry_dir: Path) -> set[str]:
    return {child.name for child in registry_dir.iterdir()}


@pytest.fixture
def sources(tmp_path: Path) -> Path:
    """registry/src with one index holding three serde versions and one libc."""
    root = tmp_path / 'registry' / 'src'
    registry_dir = root / 'index.crates.io-1'
    make_crate_source(registry_dir, 'serde-1.0.0', 10)
    make_crate_source(registry_dir, 'serde-1.0.1', 20)
    make_crate_source(registry_dir, 'serde-0.9.9', 40)
    make_crate_source(registry_dir, 'libc-0.2.0', 80)
    return root


def test_parse_splits_on_last_dash() -> None:
    entry = parse_source_entry(Path('/src/tokio-macros-2.1.0'))
    assert entry.package_name == 'tokio-macros'
    assert entry.version == '2.1.0'


def test_parse_rejects_name_without_version() -> None:
    with pytest.raises(MalformedPackageNameError) as exc_info:
        parse_source_entry(Path('/src/nodash'))
    assert exc_info.value.path == Path('/src/nodash')


def test_keep_one_removes_older_versions(sources: Path, output: RecordingLogger) -> None:
    registry_dir = sources / 'index.crates.io-1'

    result = prune(1, dry_run=False, registry_sources_root=sources, output=output)

    assert _names(registry_dir) == {'serde-1.0.1', 'libc-0.2.0'}
    assert result.removed_bytes == 10 + 40
    assert result.size_changed
    assert set(result.removed_entries) == {registry_dir / 'serde-1.0.0', registry_dir / 'serde-0.9.9'}
    assert output.lines[-1] == 'Removed 50 B of compressed crate sources.'


@pytest.mark.parametrize('keep', [1, 2, 3, 5])
def test_keeps_exactly_n_newest(tmp_path: Path, keep: int) -> None:
    registry_dir = tmp_path / 'src' / 'reg'
    versions = ['1.0.0', '1.1.0', '1.2.0', '1.3.0', '1.4.0']
    for version in versions:
        make_crate_source(registry_dir, f'rand-{version}', 4)

    result = prune(keep, dry_run=False, registry_sources_root=tmp_path / 'src')

    remaining = sorted(_names(registry_dir), reverse=True)
    assert remaining == [f'rand-{v}' for v in sorted(versions, reverse=True)[:keep]]
    assert len(result.removed_entries) == len(versions) - min(keep, len(versions))


def test_keep_zero_removes_everything(sources: Path) -> None:
    result = prune(0, dry_run=False, registry_sources_root=sources)

    assert _names(sources / 'index.crates.io-1') == set()
    assert result.removed_bytes == 150


def test_dry_run_touches_nothing_and_reports_same_size(sources: Path, output: RecordingLogger) -> None:
    registry_dir = sources / 'index.crates.io-1'
    before = _names(registry_dir)

    result = prune(1, dry_run=True, registry_sources_root=sources, output=output)

    assert _names(registry_dir) == before
    assert result.removed_bytes == 50
    assert not result.size_changed
    assert f'dry run: not actually deleting serde 1.0.0 at {registry_dir / "serde-1.0.0"}' in output.lines
    assert f'dry run: not actually deleting serde 0.9.9 at {registry_dir / "serde-0.9.9"}' in output.lines


def test_lexicographic_order_is_not_semver_aware(tmp_path: Path) -> None:
    """Raw-name ordering ranks 0.9.0 above 0.10.0, so 0.9.0 is the version kept."""
    registry_dir = tmp_path / 'src' / 'reg'
    make_crate_source(registry_dir, 'foo-0.9.0', 2)
    make_crate_source(registry_dir, 'foo-0.10.0', 2)

    prune(1, dry_run=False, registry_sources_root=tmp_path / 'src')

    assert _names(registry_dir) == {'foo-0.9.0'}


def test_semver_order_keeps_highest_version(tmp_path: Path) -> None:
    registry_dir = tmp_path / 'src' / 'reg'
    make_crate_source(registry_dir, 'foo-0.9.0', 2)
    make_crate_source(registry_dir, 'foo-0.10.0', 2)

    prune(1, dry_run=False, registry_sources_root=tmp_path / 'src', version_order='semver')

    assert _names(registry_dir) == {'foo-0.10.0'}


def test_registries_are_pruned_independently(tmp_path: Path) -> None:
    root = tmp_path / 'src'
    make_crate_source(root / 'crates-io', 'log-0.4.1', 1)
    make_crate_source(root / 'crates-io', 'log-0.4.2', 1)
    make_crate_source(root / 'mirror', 'log-0.4.1', 1)

    prune(1, dry_run=False, registry_sources_root=root)

    assert _names(root / 'crates-io') == {'log-0.4.2'}
    assert _names(root / 'mirror') == {'log-0.4.1'}


def test_malformed_entry_aborts_before_deleting(sources: Path) -> None:
    registry_dir = sources / 'index.crates.io-1'
    (registry_dir / 'nodash').mkdir()
    before = _names(registry_dir)

    with pytest.raises(MalformedPackageNameError):
        prune(1, dry_run=False, registry_sources_root=sources)

    assert _names(registry_dir) == before


def test_missing_sources_root_is_empty(tmp_path: Path) -> None:
    result = prune(1, dry_run=False, registry_sources_root=tmp_path / 'nope')

    assert result.removed_bytes == 0
    assert result.outcomes == ()


def test_group_by_package_keeps_similar_names_apart() -> None:
    paths = [Path(f'/reg/{name}') for name in ('serde-1.0.0', 'serde-derive-1.0.0', 'serde-1.0.1')]

    groups = group_by_package(parse_source_entry(path) for path in paths)

    by_name = {group.package_name: [entry.version for entry in group.entries] for group in groups}
    assert by_name == {'serde-derive': ['1.0.0'], 'serde': ['1.0.1', '1.0.0']}


def test_semver_order_ranks_unparsable_versions_lowest(tmp_path: Path) -> None:
    registry_dir = tmp_path / 'src' / 'reg'
    make_crate_source(registry_dir, 'foo-1.²', 2)
    make_crate_source(registry_dir, 'foo-zzz', 2)
    make_crate_source(registry_dir, 'foo-0.1.0', 2)

    prune(1, dry_run=False, registry_sources_root=tmp_path / 'src', version_order='semver')

    assert _names(registry_dir) == {'foo-0.1.0'}


def test_semver_order_between_unparsable_versions_is_textual(tmp_path: Path) -> None:
    registry_dir = tmp_path / 'src' / 'reg'
    make_crate_source(registry_dir, 'foo-1.²', 2)
    make_crate_source(registry_dir, 'foo-zzz', 2)

    prune(1, dry_run=False, registry_sources_root=tmp_path / 'src', version_order='semver')

    assert _names(registry_dir) == {'foo-zzz'}


def test_semver_order_ranks_release_above_prerelease(tmp_path: Path) -> None:
    registry_dir = tmp_path / 'src' / 'reg'
    make_crate_source(registry_dir, 'foo-1.0.0rc1', 2)
    make_crate_source(registry_dir, 'foo-1.0.0', 2)

    prune(1, dry_run=False, registry_sources_root=tmp_path / 'src', version_order='semver')

    assert _names(registry_dir) == {'foo-1.0.0'}


def test_failed_entry_is_reported_and_others_removed(
    sources: Path, output: RecordingLogger, monkeypatch: pytest.MonkeyPatch
) -> None:
    registry_dir = sources / 'index.crates.io-1'
    fail_rmtree_at(monkeypatch, registry_dir / 'serde-1.0.0', delete_first='Cargo.toml')

    result = prune(1, dry_run=False, registry_sources_root=sources, output=output)

    assert _names(registry_dir) == {'serde-1.0.1', 'serde-1.0.0', 'libc-0.2.0'}
    assert result.removed_bytes == 40
    assert result.removed_entries == (registry_dir / 'serde-0.9.9',)
    assert [failure.path for failure in result.failures] == [registry_dir / 'serde-1.0.0']
    assert result.failures[0].mutated
    assert result.size_changed
    assert output.warnings[-1] == 'Failed to remove 1 crate source(s).'
