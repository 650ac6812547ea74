import pytest

from rustlings.lessons.scores import Team, build_scores_table

RESULTS = (
    "England,France,4,2\n"
    "France,Italy,3,1\n"
    "Poland,Spain,2,0\n"
    "Germany,England,2,1\n"
)


def test_build_scores():
    scores = build_scores_table(RESULTS)
    assert sorted(scores) == ["England", "France", "Germany", "Italy", "Poland", "Spain"]


def test_validate_team_score_1():
    team = build_scores_table(RESULTS)["England"]
    assert team.goals_scored == 5
    assert team.goals_conceded == 4


def test_validate_team_score_2():
    team = build_scores_table(RESULTS)["Spain"]
    assert team == Team(goals_scored=0, goals_conceded=2)


def test_goals_scored_balance_goals_conceded():
    scores = build_scores_table(RESULTS)
    assert sum(t.goals_scored for t in scores.values()) == sum(
        t.goals_conceded for t in scores.values()
    )


def test_empty_results_give_empty_table():
    assert build_scores_table("") == {}


def test_invalid_goal_count_raises():
    with pytest.raises(ValueError, match="invalid goal count"):
        build_scores_table("England,France,four,2")


def test_goal_count_out_of_range_raises():
    with pytest.raises(ValueError, match="out of range"):
        build_scores_table("England,France,256,2")


def test_missing_fields_raise():
    with pytest.raises(ValueError, match="four comma-separated fields"):
        build_scores_table("England,France,4")