import pytest

from swctl.assets import example_text, read_asset, strip_leading_comments

ENDPOINT_DEPENDENCY = """
query ($endpointId:ID!, $duration: Duration!) {
    result: getEndpointDependencies(duration: $duration, endpointId: $endpointId) {
        nodes {
            id
            name
            serviceId
            serviceName
            type
            isReal
        }
        calls {
            id
            source
            target
            detectPoints
            sourceComponents
            targetComponents
        }
    }
}
"""


def test_read_asset_trims_header(tmp_path):
    target = tmp_path / "graphqls" / "dependency" / "EndpointDependency.graphql"
    target.parent.mkdir(parents=True)
    target.write_text(
        "# Query for endpoint dependencies.\n# Fixture header.\n" + ENDPOINT_DEPENDENCY,
        encoding="utf-8",
    )
    assert read_asset(target) == ENDPOINT_DEPENDENCY


def test_read_asset_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_asset(tmp_path / "absent.graphql")


def test_strip_keeps_later_comments():
    content = "# a\n# b\nline\n# kept\nend"
    assert strip_leading_comments(content) == "line\n# kept\nend"


def test_strip_without_comments_is_identity():
    content = "first\nsecond\n"
    assert strip_leading_comments(content) == content


def test_strip_only_comments():
    assert strip_leading_comments("# one\n# two") == ""


def test_example_text_skips_all_comments():
    content = "# header\nbase-url: http://127.0.0.1:12800/graphql\n# note\ndisplay: json\n"
    assert example_text(content) == (
        "\n  Example of the file content:\n"
        "  base-url: http://127.0.0.1:12800/graphql\n"
        "  display: json\n"
        "  \n"
    )


def test_example_text_empty_content():
    assert example_text("") == "\n  Example of the file content:\n  \n"