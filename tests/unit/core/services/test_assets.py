import pytest

from cmsclient.domain.models.asset import Asset, FileUpload, NewAsset
from cmsclient.domain.models.errors import ValidationError
from cmsclient.infrastructure.http.request_builder import VERSION_HEADER


def asset_body(make_sys, asset_id="X", space_id="S", version=1, url=None):
    file_info = {"contentType": "image/png", "fileName": "logo.png", "upload": "https://upload.example/logo.png"}
    if url:
        file_info["url"] = url
    return {
        "fields": {"title": {"en-US": "Logo"}, "file": {"en-US": file_info}},
        "sys": make_sys(asset_id, "Asset", version=version, space_id=space_id),
    }


@pytest.fixture
def asset(make_sys):
    return Asset.from_dict(asset_body(make_sys))


def test_publish_asset(management, transport, make_sys, asset):
    """PUT {base}/spaces/S/assets/X/published with version header 1."""
    transport.queue(asset_body(make_sys, version=2))

    published = management.assets.publish_asset(asset)

    request = transport.last
    assert request.method == "PUT"
    assert request.url == "https://api.contentful.com/spaces/S/assets/X/published"
    assert request.headers[VERSION_HEADER] == "1"
    assert published.version == 2


def test_create_asset_none_is_rejected(management, transport):
    with pytest.raises(ValidationError):
        management.assets.create_asset(None)
    assert transport.requests == []


def test_create_asset(management, transport, make_sys):
    new_asset = NewAsset(
        space_id="S",
        title={"en-US": "Logo"},
        file={"en-US": FileUpload("image/png", "logo.png", "https://upload.example/logo.png")},
    )
    transport.queue(asset_body(make_sys))

    created = management.assets.create_asset(new_asset)

    assert transport.last.method == "POST"
    assert transport.last.url == "https://api.contentful.com/spaces/S/assets"
    assert transport.last.json == {
        "fields": {
            "title": {"en-US": "Logo"},
            "file": {"en-US": {"contentType": "image/png", "fileName": "logo.png", "upload": "https://upload.example/logo.png"}},
        }
    }
    assert not created.is_processed("en-US")


def test_create_asset_requires_upload_details(management, transport):
    incomplete = NewAsset(space_id="S", title={"en-US": "Logo"}, file={"en-US": FileUpload("image/png", "", "u")})
    with pytest.raises(ValidationError, match="file name"):
        management.assets.create_asset(incomplete)
    assert transport.requests == []


def test_process_asset(management, transport, asset):
    assert management.assets.process_asset(asset, "en-US") is None
    request = transport.last
    assert request.method == "PUT"
    assert request.url == "https://api.contentful.com/spaces/S/assets/X/files/en-US/process"
    assert request.headers[VERSION_HEADER] == "1"


def test_process_asset_requires_locale(management, transport, asset):
    with pytest.raises(ValidationError):
        management.assets.process_asset(asset, "")
    assert transport.requests == []


@pytest.mark.parametrize("operation, method, suffix", [
    ("unpublish_asset", "DELETE", "/published"),
    ("archive_asset", "PUT", "/archived"),
    ("unarchive_asset", "DELETE", "/archived"),
    ("update_asset", "PUT", ""),
])
def test_versioned_operations(management, transport, make_sys, asset, operation, method, suffix):
    transport.queue(asset_body(make_sys, version=2))
    getattr(management.assets, operation)(asset)
    assert transport.last.method == method
    assert transport.last.url == f"https://api.contentful.com/spaces/S/assets/X{suffix}"
    assert transport.last.headers[VERSION_HEADER] == "1"


def test_delete_asset(management, transport, asset):
    management.assets.delete_asset(asset)
    assert transport.last.method == "DELETE"
    assert VERSION_HEADER not in transport.last.headers


def test_fetch_assets_published_filter(management, transport):
    transport.queue({"total": 0, "skip": 0, "limit": 100, "items": []})
    management.assets.fetch_assets("S", published=True)
    assert transport.last.params == [("sys.publishedAt[exists]", "true"), ("limit", "100"), ("skip", "0")]


def test_fetch_asset_processed(management, transport, make_sys):
    transport.queue(asset_body(make_sys, url="//images.example/logo.png"))
    asset = management.assets.fetch_asset("S", "X")
    assert asset.is_processed("en-US")
    assert not asset.is_processed("de-DE")


def test_asset_without_space_is_rejected(management, transport):
    orphan = Asset.from_dict({"sys": {"id": "X", "version": 1}})
    with pytest.raises(ValidationError):
        management.assets.publish_asset(orphan)
    assert transport.requests == []


def test_process_asset_encodes_locale(management, transport, asset):
    management.assets.process_asset(asset, "en/US")
    assert transport.last.url == "https://api.contentful.com/spaces/S/assets/X/files/en%2FUS/process"
