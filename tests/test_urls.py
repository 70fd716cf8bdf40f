from imagehost.urls import purify_url


class TestPurifyUrl:
    """Test suite for purify_url."""

    def test_plain_path_unchanged(self):
        assert purify_url("a/b.png") == "a/b.png"

    def test_strips_query_and_fragment(self):
        assert purify_url("a/b.png?raw=true") == "a/b.png"
        assert purify_url("a/b.png#frag") == "a/b.png"
        assert purify_url("a/b.png#frag?x=1") == "a/b.png"

    def test_percent_decodes(self):
        assert purify_url("img/my%20pic.png") == "img/my pic.png"
