import numpy as np
import pytest
from facemood.scores import softmax, interpret_scores

LOGIT_CASES = [
    [2.0, 1.0, 0.1],
    [0.0, 0.0, 0.0, 0.0],
    [1000.0, 999.0, -1000.0],
    [-50.0, -49.5, -60.0, -48.0, -70.0, -51.0, -52.0],
    [3.5],
]

@pytest.mark.parametrize("logits", LOGIT_CASES)
def test_softmax_is_distribution(logits):
    p = softmax(logits)
    assert abs(p.sum() - 1.0) < 1e-5
    assert np.all((p >= 0.0) & (p <= 1.0))

@pytest.mark.parametrize("logits", LOGIT_CASES)
def test_softmax_shift_invariant(logits):
    base = softmax(logits)
    for c in (-100.0, 3.0, 500.0):
        assert np.allclose(softmax(np.asarray(logits) + c), base, atol=1e-9)

def test_happy_scenario():
    res = interpret_scores([2.0, 1.0, 0.1], ["happy", "sad", "neutral"])
    assert res.label == "happy"
    assert res.confidence == pytest.approx(0.659, abs=1e-3)

def test_first_index_wins_ties():
    assert interpret_scores([1.0, 3.0, 3.0], ["a", "b", "c"]).label == "b"

def test_short_registry_fallback():
    res = interpret_scores(np.array([0.0, 0.1, 5.0], dtype=np.float32), ["happy"])
    assert res.label == "class_2"
    assert 0.0 <= res.confidence <= 1.0

def test_accepts_batched_logits():
    res = interpret_scores(np.array([[0.0, 4.0]], dtype=np.float32), ["x", "y"])
    assert res.label == "y"

def test_empty_vector_rejected():
    with pytest.raises(ValueError):
        softmax([])
