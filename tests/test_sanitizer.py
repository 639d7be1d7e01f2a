from detag.decoding.base import Decoder, IdentityDecoder
from detag.normalization import BlockMarkers, HtmlSanitizer, strip_html


class RecordingDecoder(Decoder):
    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    def decode(self, text):
        self.calls.append(self.name)
        return text


def test_script_content_with_brackets_is_discarded():
    assert strip_html("<script>var a = 1>2;</script><p>Text</p>") == "Text"


def test_empty_input():
    assert strip_html(None) == ""
    assert strip_html("") == ""


def test_tags_become_word_separators():
    assert strip_html("<p>Hello</p><p>World</p>") == "Hello World"


def test_comments_and_styles_are_removed():
    html = (
        "<html><head><style type='text/css'>p > a { color: red }</style></head>"
        "<body><!-- nav --><h1>Title</h1>\n\n<p>Body  text</p></body></html>"
    )
    assert strip_html(html) == "Title Body text"


def test_uppercase_blocks_are_removed():
    assert strip_html("<SCRIPT>alert(1)</SCRIPT>ok") == "ok"


def test_entities_are_decoded_before_stripping():
    assert strip_html("Tom &amp; Jerry") == "Tom & Jerry"
    assert strip_html("&lt;b&gt;bold&lt;/b&gt;") == "bold"


def test_url_encoding_is_decoded():
    assert strip_html("a%20b+c") == "a b c"


def test_unterminated_script_is_kept():
    assert strip_html("before <script>x") == "before x"


def test_plain_text_is_only_whitespace_collapsed():
    assert strip_html("  just\nsome   words ") == "just some words"


def test_decoders_are_injected_and_run_in_order():
    calls = []
    sanitizer = HtmlSanitizer(
        url_decoder=RecordingDecoder("url", calls),
        entity_decoder=RecordingDecoder("entity", calls),
    )
    assert sanitizer.strip_html("<b>x</b>") == "x"
    assert calls == ["url", "entity"]


def test_identity_decoders_leave_encoding_alone():
    sanitizer = HtmlSanitizer(IdentityDecoder(), IdentityDecoder())
    assert sanitizer.strip_html("a+b &amp; c") == "a+b &amp; c"


def test_custom_blocks():
    sanitizer = HtmlSanitizer(blocks=(BlockMarkers("noscript", "<noscript", "</noscript>"),))
    assert sanitizer.strip_html("<noscript>enable js</noscript><script>x</script>") == "x"


def test_remove_tags_skips_decoding_and_blocks():
    sanitizer = HtmlSanitizer()
    assert sanitizer.remove_tags("<style>p{}</style>a&amp;b%20") == "p{}a&amp;b%20"


def test_falsy_decoders_are_not_replaced():
    class EmptyDecoder(IdentityDecoder):
        def __len__(self):
            return 0

    url, entity = EmptyDecoder(), EmptyDecoder()
    sanitizer = HtmlSanitizer(url, entity)
    assert sanitizer.url_decoder is url
    assert sanitizer.entity_decoder is entity
    assert sanitizer.strip_html("a+b") == "a+b"
