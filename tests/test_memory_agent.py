"""
Unit tests for memory_agent.py
"""

from memory_agent import MemoryAgent


def test_starts_empty():
    memory = MemoryAgent()

    assert len(memory) == 0
    assert memory.as_dict() == {}
    assert memory.get_rating("비빔밥") is None


def test_save_and_read_back():
    memory = MemoryAgent()

    memory.save_rating("비빔밥", 4)
    memory.save_rating("어탕국수", 2)

    assert memory.get_rating("비빔밥") == 4
    assert memory.as_dict() == {"비빔밥": 4, "어탕국수": 2}
    assert memory.list_rated_foods() == ["비빔밥", "어탕국수"]


def test_saving_again_overwrites():
    memory = MemoryAgent()

    memory.save_rating("김치찌개", 3)
    memory.save_rating("김치찌개", 5)

    assert len(memory) == 1
    assert memory.get_rating("김치찌개") == 5


def test_scores_are_clamped():
    memory = MemoryAgent()

    assert memory.save_rating("홍어삼합", 0) == 1
    assert memory.save_rating("라면", 7) == 5


def test_key_is_exact_food_name():
    memory = MemoryAgent()

    memory.save_rating("물냉면", 4)

    assert memory.get_rating("물냉면 ") is None
    assert memory.get_rating("비빔냉면") is None


def test_clear():
    memory = MemoryAgent()
    memory.save_rating("잡채", 4)

    memory.clear()

    assert memory.as_dict() == {}
