from plagcheck.utils.text_utils import extract_search_terms, normalize


def test_normalize_lowercases_and_strips_punctuation() -> None:
    result = normalize("Hello, World!  Foo-bar_baz")

    assert result.words == ["hello", "world", "foobarbaz"]
    assert result.text == "hello world foobarbaz"
    assert result.raw_text == "Hello, World!  Foo-bar_baz"


def test_tokens_keep_index_and_raw_offset() -> None:
    result = normalize("Hello, World!  Foo-bar_baz")

    assert [t.index for t in result.tokens] == [0, 1, 2]
    assert [t.offset for t in result.tokens] == [0, 7, 15]


def test_punctuation_only_words_are_dropped() -> None:
    result = normalize("one -- two ... three")

    assert result.words == ["one", "two", "three"]
    assert [t.offset for t in result.tokens] == [0, 7, 15]


def test_empty_and_blank_input() -> None:
    assert normalize("").tokens == []
    assert normalize("").text == ""
    assert normalize("   \n\t ").words == []
    assert normalize("?!... ,,, --").words == []


def test_normalization_is_idempotent() -> None:
    raw = "  The ÉCOLE's   students\tran (quickly) -- to class #42!  "
    once = normalize(raw)
    twice = normalize(once.text)

    assert twice.words == once.words
    assert normalize(twice.text).text == once.text


def test_search_terms_pick_first_middle_last() -> None:
    sentences = [
        "The first sentence has quite a few words in it",
        "The second sentence also has quite a few words",
        "The third sentence sits right in the middle here",
        "The fourth sentence is almost at the very end",
        "The fifth sentence closes the whole paragraph out",
    ]
    text = ". ".join(sentences) + "."

    assert extract_search_terms(text) == [sentences[0], sentences[2], sentences[4]]


def test_search_terms_keep_all_when_few() -> None:
    text = "Too short. This sentence is long enough to be a search term!"

    assert extract_search_terms(text) == ["This sentence is long enough to be a search term"]


def test_search_terms_fall_back_to_prefix() -> None:
    text = "Short one. Another short. " * 10

    assert extract_search_terms("tiny") == ["tiny"]
    assert extract_search_terms(text) == [text[:100]]
