import pytest

from locallens.search import Entry, cosine_similarity, find_top_k


def test_find_top_k():
    entries = [
        Entry("dog.jpg", "A brown dog", [1, 0, 0, 0]),
        Entry("cat.jpg", "A white cat", [0, 1, 0, 0]),
        Entry("bird.jpg", "A blue bird", [0, 0, 1, 0]),
    ]
    results = find_top_k([1, 0.1, 0, 0], entries, 2)
    assert len(results) == 2
    assert results[0].path == "dog.jpg"
    assert results[1].path == "cat.jpg"
    assert results[0].description == "A brown dog"


def test_find_top_k_less_than_k():
    entries = [Entry("a.jpg", "A", [1, 0])]
    results = find_top_k([1, 0], entries, 5)
    assert len(results) == 1


def test_find_top_k_empty():
    assert find_top_k([1, 0], [], 5) == []


def test_find_top_k_non_positive_k():
    entries = [Entry("a.jpg", "A", [1, 0])]
    assert find_top_k([1, 0], entries, 0) == []
    assert find_top_k([1, 0], entries, -1) == []


def test_find_top_k_scores_are_descending():
    entries = [
        Entry("a.jpg", "A", [0, 1]),
        Entry("b.jpg", "B", [1, 1]),
        Entry("c.jpg", "C", [1, 0]),
        Entry("d.jpg", "D", [-1, 0]),
    ]
    results = find_top_k([1, 0], entries, 4)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0].path == "c.jpg"
    assert results[-1].path == "d.jpg"


@pytest.mark.parametrize(
    "a, b, want",
    [
        ([1, 0, 0], [1, 0, 0], 1.0),
        ([1, 0, 0], [0, 1, 0], 0.0),
        ([1, 0, 0], [-1, 0, 0], -1.0),
        ([], [], 0.0),
        ([1, 0], [1, 0, 0], 0.0),
    ],
    ids=["identical", "orthogonal", "opposite", "empty", "different lengths"],
)
def test_cosine_similarity(a, b, want):
    assert cosine_similarity(a, b) == pytest.approx(want, abs=0.01)


def test_cosine_similarity_zero_vector():
    assert cosine_similarity([0, 0], [1, 0]) == 0.0