from itertools import combinations


def assert_well_formed(problem):
    """Four sorted choices, exactly one matching the answer, all pairwise distinct."""
    choices = problem.choices
    assert len(choices) == 4
    assert choices == sorted(choices)
    matches = [c for c in choices if abs(c - problem.answer) < problem.tolerance]
    assert len(matches) == 1, f"{problem.pattern}: {choices} vs {problem.answer}"
    for a, b in combinations(choices, 2):
        assert abs(a - b) > problem.tolerance, f"{problem.pattern}: {choices}"
    assert problem.question
    assert problem.explanation
