#!filepath: tests/reductions/test_csoaa.py
from __future__ import annotations

import math

import pytest

from costsense.core.example import NOT_APPLICABLE
from costsense.core.features import CONSTANT, SparseFeatures
from costsense.learners.hashed_linear import HashedLinearRegressor
from costsense.reductions.csoaa import CSOAA
from costsense.reductions.setup import setup
from costsense.utils.errors import MalformedExample

F = SparseFeatures.from_dict({1: 1.0, 2: 1.0})


def _learned_targets(mock_learner):
    return [(c.args[1], c.args[2]) for c in mock_learner.learn.call_args_list]


# =============================================================================
# learn
# =============================================================================

def test_learn_one_regression_per_finite_cost(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")
    ex = make_example([0.0, NOT_APPLICABLE, 2.0], F)

    report = red.learn(ex)

    assert _learned_targets(mock_learner) == [(0.0, 1.0), (2.0, 1.0)]
    assert report.updates == 2


def test_views_are_label_specific(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")

    red.learn(make_example([0.0, 1.0], F))

    first, second = (c.args[0] for c in mock_learner.learn.call_args_list)
    assert first != second
    assert first == F.tag(0).with_constant(0)
    assert second == F.tag(1).with_constant(1)


def test_ldf_mode_uses_own_features_untagged(mock_learner, make_ldf_example):
    red = setup(mock_learner, "csoaa", ldf=True)

    red.learn(make_ldf_example({1: 0.0, 2: 1.0}))

    views = [c.args[0] for c in mock_learner.learn.call_args_list]
    assert dict(views[0]) == {10: 1.0, CONSTANT: 1.0}
    assert dict(views[1]) == {20: 1.0, CONSTANT: 1.0}


def test_non_finite_cost_excluded_from_learning(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")

    report = red.learn(make_example([0.0, math.nan, 1.0], F))

    assert _learned_targets(mock_learner) == [(0.0, 1.0), (1.0, 1.0)]
    assert [e.label_id for e in report.excluded] == [1]


def test_no_finite_cost_is_malformed_and_untouched(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")

    with pytest.raises(MalformedExample):
        red.learn(make_example([math.nan, -1.0], F, index=4))

    mock_learner.learn.assert_not_called()
    mock_learner.predict.assert_not_called()


def test_cannot_learn_from_test_example(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")

    with pytest.raises(MalformedExample, match="without costs"):
        red.learn(make_example([NOT_APPLICABLE, NOT_APPLICABLE], F))

    mock_learner.learn.assert_not_called()


# =============================================================================
# predict
# =============================================================================

def test_predict_argmin(mock_learner, make_example):
    mock_learner.predict.side_effect = [2.0, 0.5, 1.0]
    red = setup(mock_learner, "csoaa")

    pred = red.predict(make_example([0.0, 1.0, 2.0], F))

    assert pred.label_id == 1
    assert pred.score == 0.5
    assert pred.scores == {0: 2.0, 1: 0.5, 2: 1.0}


def test_tie_breaks_to_lowest_label(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")
    ex = make_example([1.0, 1.0, 1.0], F, label_ids=[5, 3, 9])

    picks = {red.predict(ex).label_id for _ in range(5)}

    assert picks == {3}


def test_test_example_predicts_over_all_candidates(mock_learner, make_example):
    mock_learner.predict.side_effect = [1.0, -1.0]
    red = setup(mock_learner, "csoaa")

    pred = red.predict(make_example([NOT_APPLICABLE, NOT_APPLICABLE], F))

    assert pred.label_id == 1


def test_single_candidate_one_call(mock_learner, make_example):
    mock_learner.predict.return_value = 0.7
    red = setup(mock_learner, "csoaa")
    ex = make_example([NOT_APPLICABLE, 3.0, math.nan], F)

    pred = red.predict(ex)
    red.learn(ex)

    assert pred.label_id == 1
    assert pred.score == 0.7
    assert mock_learner.predict.call_count == 1
    assert mock_learner.learn.call_count == 1


def test_process_reports_cost_of_prediction(mock_learner, make_example):
    mock_learner.predict.side_effect = [1.0, 0.0]
    red = setup(mock_learner, "csoaa")

    out = red.process(make_example([0.0, 4.0], F, index=12))

    assert out.prediction.label_id == 1
    assert out.loss == 4.0
    assert out.example_index == 12
    assert out.report.updates == 2


def test_process_test_example_skips_learning(mock_learner, make_example):
    red = setup(mock_learner, "csoaa")

    out = red.process(make_example([NOT_APPLICABLE, NOT_APPLICABLE], F))

    assert out.is_test
    assert out.loss is None
    assert out.report is None
    mock_learner.learn.assert_not_called()


# =============================================================================
# with a real base learner
# =============================================================================

@pytest.fixture
def trained(make_example) -> CSOAA:
    red = setup(HashedLinearRegressor(bits=18), "csoaa")
    for _ in range(5):
        red.learn(make_example([0.0, 1.0, 2.0], F))
    return red


def test_stable_argmin_under_reordering(trained, make_example):
    forward = make_example([0.0, 1.0, 2.0], F, label_ids=[0, 1, 2])
    backward = make_example([2.0, 1.0, 0.0], F, label_ids=[2, 1, 0])

    assert trained.predict(forward).label_id == 0
    assert trained.predict(backward).label_id == 0


def test_predict_is_idempotent(trained, make_example):
    ex = make_example([0.0, 1.0, 2.0], F)

    assert trained.predict(ex) == trained.predict(ex)


def test_one_pass_moves_each_label_toward_its_cost(make_example):
    red = setup(HashedLinearRegressor(bits=18), "csoaa")
    ex = make_example([0.0, 1.0, 2.0], F)

    before = red.predict(ex)
    red.learn(ex)
    after = red.predict(ex)

    for label, cost in enumerate([0.0, 1.0, 2.0]):
        assert abs(after.scores[label] - cost) <= abs(before.scores[label] - cost)
    assert after.scores[1] > 0.0
    assert after.scores[2] > after.scores[1]

    def margin(p):
        runner_up = sorted(p.scores.values())[1]
        return runner_up - p.score

    assert after.label_id == 0
    assert margin(after) > margin(before)
