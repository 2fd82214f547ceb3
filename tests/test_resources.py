from blockrules.resources import Resource, Resources


def test_parses_empty_resources():
    assert Resources.parse("").resources == {}


def test_parses_one_resource():
    resources = Resources.parse("foo application/javascript\ncontent")
    assert resources.resources == {
        "foo": Resource(content_type="application/javascript", data="content")
    }


def test_parses_two_resources():
    text = """
foo application/javascript
content1

pixel.png image/png;base64
content2"""
    resources = Resources.parse(text)
    assert resources.resources == {
        "foo": Resource(content_type="application/javascript", data="content1"),
        "pixel.png": Resource(content_type="image/png;base64", data="content2"),
    }


def test_robust_to_weird_format():
    text = """
# Comment
    # Comment 2
foo application/javascript
content1
# Comment 3

# Type missing
pixel.png
content

# Content missing
pixel.png image/png;base64

# This one is good!
pixel.png   image/png;base64
content2
"""
    resources = Resources.parse(text)
    assert resources.resources == {
        "foo": Resource(content_type="application/javascript", data="content1"),
        "pixel.png": Resource(content_type="image/png;base64", data="content2"),
    }


def test_parses_noop_resources():
    text = """
nooptext text/plain


noopcss text/css


"""
    resources = Resources.parse(text)
    assert resources.resources == {
        "nooptext": Resource(content_type="text/plain", data=""),
        "noopcss": Resource(content_type="text/css", data=""),
    }


def test_multiline_body_is_kept():
    resources = Resources.parse("script.js application/javascript\nline1\nline2\n")
    assert resources.get_resource("script.js") == Resource(
        content_type="application/javascript", data="line1\nline2"
    )


def test_get_resource_missing():
    resources = Resources.parse("foo application/javascript\ncontent")
    assert resources.get_resource("bar") is None


def test_add_resource_and_get():
    resources = Resources()
    assert resources.resources == {}
    resource = Resource(content_type="image/gif;base64", data="R0lGOD")
    resources.add_resource("1x1.gif", resource)
    assert resources.get_resource("1x1.gif") == resource


def test_add_resource_replaces_existing():
    resources = Resources.parse("foo application/javascript\nold")
    resources.add_resource("foo", Resource(content_type="text/plain", data="new"))
    assert resources.get_resource("foo") == Resource(content_type="text/plain", data="new")
    assert len(resources.resources) == 1