"""Unit tests for critical path analysis and what-if impact."""
import pytest

from taskgraph.analysis.critical_path import analyze_critical_path, print_critical_path_report
from taskgraph.analysis.task_impact import analyze_task_impact, analyze_task_sensitivity


class TestAnalyzeCriticalPath:
    """Test critical / near-critical classification."""

    def test_parallel_paths(self, parallel_store, parallel_durations):
        result = analyze_critical_path(parallel_store, parallel_durations,
                                       near_critical_threshold=5.0)

        assert [n.task_id for n in result.critical_path] == ['task-1', 'task-3']
        assert [n.task_id for n in result.near_critical_tasks] == ['task-2']
        assert result.project_duration == 6.0
        assert result.total_tasks == 3
        assert result.get_critical_path_length() == 2
        assert result.float_distribution == {'0 (critical)': 2, '1-5 days': 1}

    def test_threshold_excludes_high_slack(self, parallel_store, parallel_durations):
        result = analyze_critical_path(parallel_store, parallel_durations,
                                       near_critical_threshold=1.0)
        assert result.near_critical_tasks == []

    def test_near_critical_sorted_by_slack(self, chain_store):
        durations = {'task-1': 3.0, 'task-2': 2.0, 'task-3': 4.0, 'x': 6.0, 'y': 8.0}
        result = analyze_critical_path(chain_store, durations, near_critical_threshold=5.0)

        assert [n.task_id for n in result.near_critical_tasks] == ['y', 'x']
        assert [n.slack for n in result.near_critical_tasks] == pytest.approx([1.0, 3.0])

    def test_risk_summary(self, parallel_store, parallel_durations):
        result = analyze_critical_path(parallel_store, parallel_durations,
                                       near_critical_threshold=5.0)
        assert result.get_risk_summary() == '2 critical tasks, 1 near-critical (<= 5 days slack)'

    def test_print_report(self, diamond_store, diamond_durations, capsys):
        result = analyze_critical_path(diamond_store, diamond_durations)
        print_critical_path_report(result)

        out = capsys.readouterr().out
        assert 'CRITICAL PATH ANALYSIS REPORT' in out
        assert 'Project Duration: 7.0 days' in out
        assert 'Critical Tasks: 3' in out

    def test_print_report_empty(self, store, capsys):
        print_critical_path_report(analyze_critical_path(store, {}))
        assert 'Total Tasks: 0' in capsys.readouterr().out


class TestTaskImpact:
    """Test what-if duration changes."""

    def test_slip_on_critical_task(self, parallel_store, parallel_durations):
        result = analyze_task_impact(parallel_store, parallel_durations, 'task-1', 2.0)

        assert result.slip == pytest.approx(2.0)
        assert result.new_project_duration == pytest.approx(8.0)
        assert result.affected_task_ids == ['task-3']
        assert not result.critical_path_changed
        assert result.get_slip_summary() == '2.0 days slip'

    def test_slack_absorbs_delay(self, parallel_store, parallel_durations):
        result = analyze_task_impact(parallel_store, parallel_durations, 'task-2', 2.0)

        assert result.slip == pytest.approx(0.0)
        assert result.affected_task_ids == []
        assert result.get_slip_summary() == 'No impact on project finish'

    def test_critical_path_shift(self, parallel_store, parallel_durations):
        result = analyze_task_impact(parallel_store, parallel_durations, 'task-2', 4.0)

        assert result.slip == pytest.approx(1.0)
        assert result.original_critical_path == ['task-1', 'task-3']
        assert result.new_critical_path == ['task-2', 'task-3']
        assert result.critical_path_changed

    def test_negative_delta_clamped(self, parallel_store, parallel_durations):
        result = analyze_task_impact(parallel_store, parallel_durations, 'task-2', -10.0)
        assert result.duration_delta == pytest.approx(-2.0)

    def test_input_not_modified(self, parallel_store, parallel_durations):
        analyze_task_impact(parallel_store, parallel_durations, 'task-1', 3.0)
        assert parallel_durations['task-1'] == 5.0

    def test_unknown_task(self, parallel_store, parallel_durations):
        with pytest.raises(KeyError):
            analyze_task_impact(parallel_store, parallel_durations, 'task-9')

    def test_sensitivity_sorted_by_slip(self, parallel_store, parallel_durations):
        results = analyze_task_sensitivity(parallel_store, parallel_durations,
                                           duration_delta=2.0)

        assert [r.task_id for r in results][:2] in (['task-1', 'task-3'], ['task-3', 'task-1'])
        assert results[-1].task_id == 'task-2'

    def test_sensitivity_skips_unknown(self, parallel_store, parallel_durations):
        results = analyze_task_sensitivity(parallel_store, parallel_durations,
                                           task_ids=['task-2', 'nope'])
        assert [r.task_id for r in results] == ['task-2']
