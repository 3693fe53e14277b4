from codeguess.models import ApiBudget


def test_budget_counts_down_and_resets() -> None:
    budget = ApiBudget(max_calls=3)
    assert budget.remaining == 3
    assert not budget.exhausted

    for _ in range(3):
        budget.spend()
    assert budget.exhausted
    assert budget.remaining == 0

    budget.spend()
    assert budget.remaining == 0

    budget.reset()
    assert budget.calls == 0
    assert not budget.exhausted
