import pytest

from gamevote.services.normalizer import (
    AGGRESSIVE,
    SLUG,
    is_prefix_compatible,
    normalize,
    strip_diacritics,
)


def test_aggressive_collapses_counter_strike_spellings():
    keys = {normalize(n, AGGRESSIVE) for n in ('Counter-Strike', 'counterstrike', 'Counter Strike')}
    assert keys == {'counterstrike'}


def test_aggressive_collapses_repeated_characters():
    assert normalize('Poooker', AGGRESSIVE) == 'poker'
    # Known over-collapse: real double letters are lost too
    assert normalize('Book', AGGRESSIVE) == 'bok'
    assert normalize('Chess', AGGRESSIVE) == normalize('Ches', AGGRESSIVE)


def test_diacritics_are_stripped():
    assert strip_diacritics('Pokémon') == 'Pokemon'
    assert normalize('Pokémon Écarlate', AGGRESSIVE) == 'pokemonecarlate'
    assert normalize('Pokémon Écarlate', SLUG) == 'pokemon-ecarlate'


def test_slug_joins_words_with_single_hyphens():
    assert normalize('  Counter   Strike  ', SLUG) == 'counter-strike'
    assert normalize('Counter-Strike', SLUG) == 'counterstrike'
    assert normalize('Book', SLUG) == 'book'


@pytest.mark.parametrize('raw', ['', '   ', '!!!', None, '\t\n'])
def test_unusable_input_normalizes_to_empty(raw):
    assert normalize(raw, AGGRESSIVE) == ''
    assert normalize(raw, SLUG) == ''


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        normalize('Chess', 'phonetic')


def test_prefix_compatibility_is_not_transitive():
    assert is_prefix_compatible('mario', 'mariokart')
    assert is_prefix_compatible('marioparty', 'mario')
    assert not is_prefix_compatible('mariokart', 'marioparty')
    assert not is_prefix_compatible('', 'mario')
