import unittest

from domain.entities import IndexDocument, Sort, SortField, SortType
from domain.exceptions import IndexClosedError
from infrastructure.index.analysis import tokenize
from infrastructure.index.queries import BooleanQuery, MatchAllDocsQuery, PrefixQuery, RangeQuery, TermQuery
from infrastructure.index.searcher import SnapshotIndexSearcher


def _doc(**fields) -> IndexDocument:
    return IndexDocument(fields=fields, analyzed=frozenset({"title"}))


DOCUMENTS = [
    _doc(title="Quick brown fox", year=2001, lang="en"),
    _doc(title="Quick rabbit", year=1999, lang="en"),
    _doc(title="Lazy dog", year=2010, lang="de"),
    _doc(title="Sleepy cat", lang="fr"),
    _doc(title="Red fox jumps", year=2005, lang="en"),
]


class TestAnalysis(unittest.TestCase):
    def test_tokenize_lowercases_words(self):
        self.assertEqual(tokenize("Quick, brown-FOX!"), ["quick", "brown", "fox"])
        self.assertEqual(tokenize(None), [])


class TestQueries(unittest.TestCase):
    def test_term_query_on_analyzed_and_keyword_fields(self):
        self.assertTrue(TermQuery("title", "fox").matches(DOCUMENTS[0]))
        self.assertFalse(TermQuery("title", "Fox").matches(DOCUMENTS[0]))
        self.assertTrue(TermQuery("lang", "en").matches(DOCUMENTS[0]))
        self.assertFalse(TermQuery("lang", "e").matches(DOCUMENTS[0]))

    def test_term_query_for_missing_value(self):
        self.assertTrue(TermQuery("year", None).matches(DOCUMENTS[3]))
        self.assertFalse(TermQuery("year", None).matches(DOCUMENTS[0]))

    def test_range_query_bounds(self):
        inclusive = RangeQuery("year", lower=1999, upper=2005)
        exclusive = RangeQuery("year", lower=1999, upper=2005, include_lower=False, include_upper=False)
        self.assertTrue(inclusive.matches(DOCUMENTS[1]))
        self.assertFalse(exclusive.matches(DOCUMENTS[1]))
        self.assertFalse(exclusive.matches(DOCUMENTS[4]))
        self.assertFalse(inclusive.matches(DOCUMENTS[3]))
        self.assertEqual(str(exclusive), "year:{1999 TO 2005}")

    def test_prefix_query(self):
        self.assertTrue(PrefixQuery("title", "jum").matches(DOCUMENTS[4]))
        self.assertTrue(PrefixQuery("lang", "d").matches(DOCUMENTS[2]))
        self.assertFalse(PrefixQuery("lang", "d").matches(DOCUMENTS[0]))

    def test_boolean_query(self):
        en_not_fox = BooleanQuery.of(must=[TermQuery("lang", "en")], must_not=[TermQuery("title", "fox")])
        either = BooleanQuery.of(should=[TermQuery("lang", "de"), TermQuery("lang", "fr")])
        only_negative = BooleanQuery.of(must_not=[TermQuery("lang", "en")])

        self.assertEqual([d for d in DOCUMENTS if en_not_fox.matches(d)], [DOCUMENTS[1]])
        self.assertEqual([d for d in DOCUMENTS if either.matches(d)], DOCUMENTS[2:4])
        self.assertFalse(any(only_negative.matches(d) for d in DOCUMENTS))
        self.assertEqual(str(en_not_fox), "+lang:en -title:fox")


class TestSnapshotIndexSearcher(unittest.TestCase):
    def setUp(self) -> None:
        self.searcher = SnapshotIndexSearcher(DOCUMENTS)

    def tearDown(self) -> None:
        self.searcher.close()

    def test_relevance_order(self):
        query = BooleanQuery.of(should=[TermQuery("title", "quick"), TermQuery("title", "fox")])

        hits = self.searcher.search(query, None, 10)

        self.assertEqual(hits.total_hits, 3)
        self.assertEqual(hits.score_docs[0].doc, 0)
        self.assertEqual({hit.doc for hit in hits.score_docs}, {0, 1, 4})
        scores = [hit.score for hit in hits.score_docs]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_sorted_search_with_missing_values_first(self):
        sort = Sort(fields=(SortField("year", SortType.INT),))

        hits = self.searcher.search(MatchAllDocsQuery(), None, 10, sort)

        self.assertEqual([hit.doc for hit in hits.score_docs], [3, 1, 0, 4, 2])

    def test_reverse_and_secondary_sort(self):
        sort = Sort(fields=(SortField("lang", SortType.STRING, reverse=True), SortField("year", SortType.INT)))

        hits = self.searcher.search(MatchAllDocsQuery(), None, 10, sort)

        self.assertEqual([hit.doc for hit in hits.score_docs], [3, 1, 0, 4, 2])

    def test_limit_and_filter(self):
        english = TermQuery("lang", "en")
        sort = Sort(fields=(SortField("year", SortType.INT),))

        hits = self.searcher.search(MatchAllDocsQuery(), english, 2, sort)

        self.assertEqual(hits.total_hits, 3)
        self.assertEqual([hit.doc for hit in hits.score_docs], [1, 0])

    def test_non_positive_limit_returns_no_hits(self):
        hits = self.searcher.search(MatchAllDocsQuery(), None, 0)
        self.assertEqual(hits.total_hits, 5)
        self.assertEqual(len(hits), 0)

    def test_doc_and_max_doc(self):
        self.assertEqual(self.searcher.max_doc(), 5)
        self.assertEqual(self.searcher.doc(2).get("title"), "Lazy dog")

    def test_closed_searcher_rejects_calls(self):
        with SnapshotIndexSearcher(DOCUMENTS) as searcher:
            self.assertEqual(searcher.max_doc(), 5)
        self.assertTrue(searcher.closed)
        with self.assertRaises(IndexClosedError):
            searcher.search(MatchAllDocsQuery(), None, 1)
        with self.assertRaises(IndexClosedError):
            searcher.doc(0)


if __name__ == "__main__":
    unittest.main()
