"""Tests for api/models.py."""

# pylint: disable=missing-function-docstring

import json

import pytest

from hosts_webhook.api.models import (
    MEDIA_TYPE,
    ChangeSet,
    DomainFilter,
    Endpoint,
    ProviderSpecificProperty,
    decode_changes,
    decode_endpoints,
    encode_endpoints,
    encode_model,
)
from hosts_webhook.utils.exceptions import DecodeError


class TestMediaType:
    """Tests for the negotiated media type constant."""

    def test_value(self):
        assert MEDIA_TYPE == "application/vnd.external-dns.webhook+json;version=1"


class TestEndpointEncoding:
    """Tests for Endpoint wire encoding."""

    def test_omits_unset_fields(self):
        endpoint = Endpoint(dns_name="web.local", record_type="A", targets=["192.168.1.1"])

        assert json.loads(encode_endpoints([endpoint])) == [
            {"dnsName": "web.local", "recordType": "A", "targets": ["192.168.1.1"]}
        ]

    def test_includes_optional_fields_when_set(self):
        endpoint = Endpoint(
            dns_name="svc.example.com",
            record_type="A",
            targets=["10.0.0.1"],
            record_ttl=300,
            set_identifier="blue",
            labels={"owner": "default"},
            provider_specific=[ProviderSpecificProperty(name="alias", value="true")],
        )

        data = json.loads(encode_endpoints([endpoint]))[0]

        assert data["recordTTL"] == 300
        assert data["setIdentifier"] == "blue"
        assert data["labels"] == {"owner": "default"}
        assert data["providerSpecific"] == [{"name": "alias", "value": "true"}]

    def test_zero_ttl_is_omitted(self):
        endpoint = Endpoint(dns_name="a.local", targets=["10.0.0.1"], record_ttl=0)

        assert json.loads(encode_endpoints([endpoint])) == [
            {"dnsName": "a.local", "targets": ["10.0.0.1"]}
        ]

    def test_empty_list_encodes_as_array(self):
        assert json.loads(encode_endpoints([])) == []


class TestDomainFilter:
    """Tests for DomainFilter encoding."""

    def test_empty_filter_encodes_as_empty_object(self):
        assert json.loads(encode_model(DomainFilter())) == {}

    def test_set_fields_use_camel_case(self):
        domain_filter = DomainFilter(include=["example.com"], regex_exclude="^test")

        assert json.loads(encode_model(domain_filter)) == {
            "include": ["example.com"],
            "regexExclude": "^test",
        }


class TestDecodeChanges:
    """Tests for decode_changes."""

    def test_accepts_capitalized_keys(self):
        body = b'{"Create":[{"DNSName":"new.example.com","Targets":["10.0.0.5"]}]}'

        changes = decode_changes(body)

        assert len(changes.create) == 1
        assert changes.create[0].dns_name == "new.example.com"
        assert changes.create[0].targets == ["10.0.0.5"]
        assert not changes.delete

    def test_accepts_camel_case_keys(self):
        body = json.dumps(
            {
                "create": [{"dnsName": "a.local", "targets": ["10.0.0.1"]}],
                "updateOld": [{"dnsName": "b.local", "targets": ["10.0.0.2"]}],
                "updateNew": [{"dnsName": "b.local", "targets": ["10.0.0.3"]}],
                "delete": [{"dnsName": "c.local"}],
            }
        ).encode()

        changes = decode_changes(body)

        assert changes.update_old[0].targets == ["10.0.0.2"]
        assert changes.update_new[0].targets == ["10.0.0.3"]
        assert changes.delete[0].dns_name == "c.local"

    def test_null_lists_are_empty(self):
        changes = decode_changes(b'{"Create":null,"Delete":null,"UpdateOld":null}')

        assert changes == ChangeSet()

    def test_null_targets_are_empty(self):
        changes = decode_changes(b'{"create":[{"dnsName":"a.local","targets":null}]}')

        assert changes.create[0].targets == []

    def test_empty_object(self):
        assert decode_changes(b"{}") == ChangeSet()

    def test_unknown_keys_are_ignored(self):
        changes = decode_changes(b'{"create":[],"somethingElse":1}')

        assert changes == ChangeSet()

    @pytest.mark.parametrize(
        "body",
        [
            b"invalid json",
            b"",
            b"[]",
            b'{"create": "not-a-list"}',
            b'{"create": [{"dnsName": 5}]}',
        ],
    )
    def test_malformed_body_raises(self, body):
        with pytest.raises(DecodeError):
            decode_changes(body)

    def test_round_trip_is_lossless(self):
        original = ChangeSet(
            create=[Endpoint(dns_name="a.local", record_type="A", targets=["10.0.0.1"])],
            update_old=[
                Endpoint(
                    dns_name="b.local",
                    record_type="A",
                    targets=["10.0.0.2"],
                    record_ttl=60,
                )
            ],
            update_new=[
                Endpoint(
                    dns_name="b.local",
                    record_type="A",
                    targets=["10.0.0.3", "10.0.0.4"],
                    record_ttl=120,
                    labels={"owner": "test"},
                )
            ],
            delete=[Endpoint(dns_name="c.local", record_type="A", targets=["10.0.0.5"])],
        )

        assert decode_changes(encode_model(original)) == original


class TestDecodeEndpoints:
    """Tests for decode_endpoints."""

    def test_decodes_array(self):
        body = b'[{"dnsName":"a.local","recordType":"A","targets":["1.2.3.4"],"recordTTL":300}]'

        endpoints = decode_endpoints(body)

        assert endpoints == [
            Endpoint(
                dns_name="a.local", record_type="A", targets=["1.2.3.4"], record_ttl=300
            )
        ]

    def test_python_field_names_are_not_wire_keys(self):
        endpoints = decode_endpoints(
            b'[{"dns_name":"a.local","record_ttl":60,"targets":["10.0.0.1"]}]'
        )

        assert endpoints[0].dns_name == ""
        assert endpoints[0].record_ttl is None
        assert endpoints[0].targets == ["10.0.0.1"]

    def test_object_is_rejected(self):
        with pytest.raises(DecodeError):
            decode_endpoints(b'{"dnsName":"a.local"}')

    def test_empty_body_is_rejected(self):
        with pytest.raises(DecodeError):
            decode_endpoints(b"")
