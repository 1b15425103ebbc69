import pytest

from dataset import SEARCH_BOUNDS, SORT_BOUNDS, generate, parse_dataset, parse_target, validate_size
from errors import ValidationError


class TestGenerate:
    def test_size_and_range(self):
        values = generate(50, low=5, high=9)
        assert len(values) == 50
        assert all(5 <= v <= 9 for v in values)

    def test_seed_is_reproducible(self):
        assert generate(10, seed=3) == generate(10, seed=3)

    def test_single_value_range(self):
        assert generate(4, low=7, high=7) == [7, 7, 7, 7]

    @pytest.mark.parametrize("size", [0, -3])
    def test_non_positive_size(self, size):
        with pytest.raises(ValidationError):
            generate(size)

    def test_empty_range(self):
        with pytest.raises(ValidationError):
            generate(5, low=10, high=1)


class TestParseDataset:
    def test_plain_list(self):
        assert parse_dataset("38, 27, 43, 3") == [38, 27, 43, 3]

    def test_signs_and_whitespace(self):
        assert parse_dataset("  +4,-2 ,  0 ") == [4, -2, 0]

    def test_bad_token_is_reported(self):
        with pytest.raises(ValidationError) as exc:
            parse_dataset("3, a, 5")
        assert exc.value.token == "a"
        assert exc.value.to_dict() == {"error": "Invalid number: 'a'", "token": "a"}

    def test_empty_token(self):
        with pytest.raises(ValidationError) as exc:
            parse_dataset("3,,5")
        assert exc.value.token == ""

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_input(self, text):
        with pytest.raises(ValidationError):
            parse_dataset(text)

    def test_too_many_values_for_a_sort(self):
        text = ", ".join(str(i) for i in range(25))
        with pytest.raises(ValidationError) as exc:
            parse_dataset(text, SORT_BOUNDS)
        assert exc.value.token is None
        assert "between 2 and 20" in exc.value.message

    def test_search_allows_longer_lists(self):
        text = ", ".join(str(i) for i in range(25))
        assert len(parse_dataset(text, SEARCH_BOUNDS)) == 25

    def test_single_value_is_too_few_for_a_sort(self):
        with pytest.raises(ValidationError):
            parse_dataset("4", SORT_BOUNDS)


class TestValidateSize:
    @pytest.mark.parametrize("size", [2, 10, 20, "12"])
    def test_in_bounds(self, size):
        assert validate_size(size) == int(size)

    @pytest.mark.parametrize("size", [1, 21])
    def test_out_of_bounds(self, size):
        with pytest.raises(ValidationError):
            validate_size(size)

    def test_not_a_number(self):
        with pytest.raises(ValidationError) as exc:
            validate_size("lots")
        assert exc.value.token == "lots"


class TestParseTarget:
    def test_int_passes_through(self):
        assert parse_target(12) == 12

    def test_string(self):
        assert parse_target(" -7 ") == -7

    @pytest.mark.parametrize("value", ["x", "", None, True, "1.5"])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            parse_target(value)
