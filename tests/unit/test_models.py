"""Unit tests for dependency and CPM data models."""
import dataclasses
from datetime import datetime, timezone

import pytest

from taskgraph.cpm.models import CriticalPathNode, Dependency, DependencyType


class TestDependencyType:
    """Test dependency type classification."""

    def test_labels(self):
        assert DependencyType.BLOCKS.label == 'Blocks'
        assert DependencyType.BLOCKED_BY.label == 'Blocked By'
        assert DependencyType.RELATES_TO.label == 'Relates To'
        assert DependencyType.DUPLICATES.label == 'Duplicates'

    def test_inverse(self):
        assert DependencyType.BLOCKS.inverse() is DependencyType.BLOCKED_BY
        assert DependencyType.BLOCKED_BY.inverse() is DependencyType.BLOCKS
        assert DependencyType.RELATES_TO.inverse() is DependencyType.RELATES_TO
        assert DependencyType.DUPLICATES.inverse() is None

    def test_affects_scheduling(self):
        assert DependencyType.BLOCKS.affects_scheduling()
        assert DependencyType.BLOCKED_BY.affects_scheduling()
        assert not DependencyType.RELATES_TO.affects_scheduling()
        assert not DependencyType.DUPLICATES.affects_scheduling()

    @pytest.mark.parametrize("text,expected", [
        ('blocks', DependencyType.BLOCKS),
        ('BLOCKED_BY', DependencyType.BLOCKED_BY),
        ('Blocked By', DependencyType.BLOCKED_BY),
        ('relates-to', DependencyType.RELATES_TO),
        (' duplicates ', DependencyType.DUPLICATES),
    ])
    def test_from_value(self, text, expected):
        assert DependencyType.from_value(text) is expected

    def test_from_value_unknown(self):
        with pytest.raises(ValueError, match='Unknown dependency type'):
            DependencyType.from_value('depends_on')


class TestDependency:
    """Test dependency records."""

    def make(self, **overrides) -> Dependency:
        fields = dict(
            id='dep-1',
            from_task='task-1',
            to_task='task-2',
            dependency_type=DependencyType.BLOCKS,
            created_by='user-1',
            created_at=datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc),
        )
        fields.update(overrides)
        return Dependency(**fields)

    def test_is_immutable(self):
        dep = self.make()
        with pytest.raises(dataclasses.FrozenInstanceError):
            dep.to_task = 'task-3'

    def test_created_at_defaults_to_now(self):
        dep = Dependency('dep-1', 'a', 'b', DependencyType.BLOCKS, 'user-1')
        assert dep.created_at.tzinfo is not None
        assert (datetime.now(timezone.utc) - dep.created_at).total_seconds() < 60

    def test_other_task(self):
        dep = self.make()
        assert dep.other_task('task-1') == 'task-2'
        assert dep.other_task('task-2') == 'task-1'
        with pytest.raises(ValueError):
            dep.other_task('task-9')

    def test_to_dict(self):
        data = self.make(dependency_type=DependencyType.BLOCKED_BY).to_dict()
        assert data['dependency_type'] == 'blocked_by'
        assert data['created_at'] == '2025-01-01T09:00:00+00:00'

    def test_from_dict_restores_record(self):
        dep = self.make()
        assert Dependency.from_dict(dep.to_dict()) == dep

    def test_from_dict_without_timestamp(self):
        dep = Dependency.from_dict({
            'id': 'dep-7', 'from_task': 'a', 'to_task': 'b', 'dependency_type': 'Relates To',
        })
        assert dep.dependency_type is DependencyType.RELATES_TO
        assert dep.created_by == ''
        assert dep.created_at is not None


class TestCriticalPathNode:
    """Test CPM node calculations."""

    def test_defaults(self):
        node = CriticalPathNode('task-1', 5.0)
        assert node.earliest_start == 0.0
        assert node.latest_start == 0.0
        assert not node.is_critical

    def test_finish_times(self):
        node = CriticalPathNode('task-1', 5.0, earliest_start=2.0, latest_start=4.0)
        assert node.earliest_finish == 7.0
        assert node.latest_finish == 9.0

    def test_update_slack_critical(self):
        node = CriticalPathNode('task-1', 5.0)
        node.update_slack()
        assert node.slack == 0.0
        assert node.is_critical

    def test_update_slack_non_critical(self):
        node = CriticalPathNode('task-1', 2.0, earliest_start=0.0, latest_start=3.0)
        node.update_slack()
        assert node.slack == pytest.approx(3.0)
        assert not node.is_critical

    def test_update_slack_within_tolerance(self):
        node = CriticalPathNode('task-1', 1.0, earliest_start=1.0, latest_start=1.005)
        node.update_slack()
        assert node.is_critical

        node.update_slack(tolerance=0.001)
        assert not node.is_critical
