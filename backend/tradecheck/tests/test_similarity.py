from django.test import SimpleTestCase

from tradecheck.risk_engine.similarity import contains_phrase, contains_term, levenshtein, normalize_name, normalize_term, similarity


class SimilarityTests(SimpleTestCase):
    def test_normalize_name_strips_punctuation_and_whitespace(self):
        self.assertEqual(normalize_name('  ACME,  Trading   Inc. '), 'acme trading inc')
        self.assertEqual(normalize_name(''), '')

    def test_levenshtein_distance(self):
        self.assertEqual(levenshtein('kitten', 'sitting'), 3)
        self.assertEqual(levenshtein('', 'abc'), 3)
        self.assertEqual(levenshtein('same', 'same'), 0)

    def test_similarity_bounds_and_symmetry(self):
        pairs = [
            ('rosneft', 'rosneft oil'),
            ('test exports ltd', 'prohibited exports'),
            ('a', ''),
            ('sberbank', 'sperbank'),
        ]
        for first, second in pairs:
            value = similarity(first, second)
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 1.0)
            self.assertEqual(value, similarity(second, first))

    def test_similarity_identity(self):
        self.assertEqual(similarity('wagner group', 'wagner group'), 1.0)
        self.assertEqual(similarity('', ''), 1.0)

    def test_contains_term_matches_whole_words_only(self):
        self.assertTrue(contains_term('global arms traders', 'arms'))
        self.assertFalse(contains_term('green farms co', 'arms'))
        self.assertTrue(contains_term('acme shell company ltd', 'shell company'))
        self.assertFalse(contains_term('', 'arms'))

    def test_normalize_term_turns_punctuation_into_word_breaks(self):
        self.assertEqual(normalize_term('North-Korea'), 'north korea')
        self.assertEqual(normalize_term('  North  Korea. '), 'north korea')
        self.assertEqual(normalize_term('restricted_country'), 'restricted country')
        self.assertEqual(normalize_term(None), '')

    def test_contains_phrase_normalizes_both_sides(self):
        self.assertTrue(contains_phrase('Conflict-Minerals (raw)', 'conflict minerals'))
        self.assertTrue(contains_phrase('Russian Federation', 'russia'))
        self.assertFalse(contains_phrase('', 'russia'))
        self.assertFalse(contains_phrase('Russia', '--'))
