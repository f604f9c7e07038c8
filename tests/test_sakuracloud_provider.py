"""Tests for the Sakura Cloud reconciling provider."""

import logging
from unittest.mock import MagicMock
import httpx
import pytest

from zonesync.base.config import SakuraCloudConfig
from zonesync.base.domain_filter import DomainFilter
from zonesync.base.endpoint import Changes, Endpoint
from zonesync.base.exceptions import ProviderUnavailableError
from zonesync.base.logger import zs_logger
from zonesync.sakuracloud.client import DNSClient
from zonesync.sakuracloud.models import DNSRecord, DNSZone
from zonesync.sakuracloud.provider import SakuraCloudProvider, zone_contains

WWW = DNSRecord(type="A", name="www", rdata="1.1.1.1", ttl=300)


def _zone(zone_id="Z1", name="example.com", records=(WWW,)):
    return DNSZone(id=zone_id, name=name, records=records)


def _ep(name, *targets, record_type="A", ttl=0):
    return Endpoint(dns_name=name, record_type=record_type, targets=targets, record_ttl=ttl)


@pytest.fixture
def client():
    mock_client = MagicMock(spec=DNSClient)
    mock_client.find.return_value = [_zone()]
    return mock_client


@pytest.fixture
def svc(client):
    return SakuraCloudProvider(client, DomainFilter(), dry_run=False), client


def _committed(client, zone_id="Z1"):
    for call in client.update.call_args_list:
        if call[0][0] == zone_id:
            return list(call[0][1])
    raise AssertionError(f"zone {zone_id} was not committed")


# --- zones ---

class TestZones:
    def test_filtered(self, client):
        client.find.return_value = [_zone(), _zone("Z2", "example.org", ())]
        provider = SakuraCloudProvider(client, DomainFilter(["example.org"]))
        assert [z.id for z in provider.zones()] == ["Z2"]
        client.find.assert_called_once_with()

    def test_no_filter_keeps_all(self, svc):
        inst, client = svc
        client.find.return_value = [_zone(), _zone("Z2", "example.org", ())]
        assert len(inst.zones()) == 2

    def test_listing_failure_propagates(self, svc):
        inst, client = svc
        client.find.side_effect = ProviderUnavailableError("boom")
        with pytest.raises(ProviderUnavailableError, match="boom"):
            inst.zones()
        assert client.find.call_count == 1

    def test_domain_filter_accessor(self, svc):
        inst, _ = svc
        assert isinstance(inst.get_domain_filter(), DomainFilter)


# --- records ---

class TestRecords:
    def test_endpoints(self, svc):
        inst, client = svc
        client.find.return_value = [
            _zone(records=(
                WWW,
                DNSRecord(type="TXT", name="@", rdata="hello", ttl=60),
                DNSRecord(type="PTR", name="1", rdata="host.example.com.", ttl=300),
            ))
        ]
        endpoints = inst.records()
        assert [(e.dns_name, e.record_type, e.targets, e.record_ttl) for e in endpoints] == [
            ("www.example.com", "A", ("1.1.1.1",), 300),
            ("example.com", "TXT", ("hello",), 60),
        ]

    def test_failure_propagates(self, svc):
        inst, client = svc
        client.find.side_effect = ProviderUnavailableError("down")
        with pytest.raises(ProviderUnavailableError):
            inst.records()

    def test_adjust_endpoints_identity(self, svc):
        inst, _ = svc
        eps = [_ep("a.example.com", "1.1.1.1")]
        assert inst.adjust_endpoints(eps) == eps


# --- apply_changes ---

class TestNoOp:
    def test_none(self, svc):
        inst, client = svc
        inst.apply_changes(None)
        client.find.assert_not_called()
        client.update.assert_not_called()

    def test_empty(self, svc):
        inst, client = svc
        inst.apply_changes(Changes())
        client.find.assert_not_called()
        client.update.assert_not_called()

    def test_update_old_only_is_skipped(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(update_old=[_ep("www.example.com", "1.1.1.1")]))
        client.find.assert_not_called()
        client.update.assert_not_called()


class TestApplyChanges:
    def test_create(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        client.update.assert_called_once()
        assert _committed(client) == [
            WWW,
            DNSRecord(type="A", name="api", rdata="2.2.2.2", ttl=300),
        ]

    def test_delete(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(delete=[_ep("www.example.com", "1.1.1.1")]))
        assert _committed(client) == []

    def test_delete_ignores_ttl(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(delete=[_ep("www.example.com", "1.1.1.1", ttl=60)]))
        assert _committed(client) == []

    def test_update_value(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(
            update_new=[_ep("www.example.com", "3.3.3.3")],
            update_old=[_ep("www.example.com", "1.1.1.1")],
        ))
        assert _committed(client) == [DNSRecord(type="A", name="www", rdata="3.3.3.3", ttl=300)]

    def test_update_ttl_only_keeps_record(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(
            update_new=[_ep("www.example.com", "1.1.1.1", ttl=600)],
            update_old=[_ep("www.example.com", "1.1.1.1", ttl=300)],
        ))
        assert _committed(client) == [WWW.model_copy(update={"ttl": 600})]

    def test_update_partial_targets(self, svc):
        inst, client = svc
        client.find.return_value = [_zone(records=(
            WWW, DNSRecord(type="A", name="www", rdata="2.2.2.2", ttl=300),
        ))]
        inst.apply_changes(Changes(
            update_new=[_ep("www.example.com", "1.1.1.1", "3.3.3.3")],
            update_old=[_ep("www.example.com", "1.1.1.1", "2.2.2.2")],
        ))
        assert sorted(r.rdata for r in _committed(client)) == ["1.1.1.1", "3.3.3.3"]

    def test_create_then_delete_same_record(self, svc):
        inst, client = svc
        ep = _ep("api.example.com", "2.2.2.2")
        inst.apply_changes(Changes(create=[ep], delete=[ep]))
        assert _committed(client) == [WWW]

    def test_duplicate_create_is_deduplicated(self, svc):
        inst, client = svc
        inst.apply_changes(Changes(create=[_ep("www.example.com", "1.1.1.1")]))
        assert _committed(client) == [WWW]

    def test_only_touched_zones_committed(self, svc):
        inst, client = svc
        client.find.return_value = [_zone(), _zone("Z2", "example.org", ())]
        inst.apply_changes(Changes(create=[_ep("api.example.org", "2.2.2.2")]))
        client.update.assert_called_once()
        assert client.update.call_args[0][0] == "Z2"

    def test_substring_membership_hits_several_zones(self, svc):
        inst, client = svc
        client.find.return_value = [_zone(), _zone("Z2", "ple.com", ())]
        inst.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        assert client.update.call_count == 2
        # "ple.com" is not a suffix match, so the name is left unstripped
        assert _committed(client, "Z2") == [
            DNSRecord(type="A", name="api.example.com", rdata="2.2.2.2", ttl=300)
        ]

    def test_listing_failure_aborts(self, svc):
        inst, client = svc
        client.find.side_effect = ProviderUnavailableError("down")
        with pytest.raises(ProviderUnavailableError):
            inst.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        client.update.assert_not_called()

    def test_commit_failure_stops_remaining_zones(self, svc):
        inst, client = svc
        client.find.return_value = [
            _zone(),
            _zone("Z2", "example.org", ()),
            _zone("Z3", "example.net", ()),
        ]
        client.update.side_effect = [MagicMock(), ProviderUnavailableError("boom"), MagicMock()]
        with pytest.raises(ProviderUnavailableError, match="boom"):
            inst.apply_changes(Changes(create=[
                _ep("a.example.com", "1.1.1.1"),
                _ep("a.example.org", "1.1.1.1"),
                _ep("a.example.net", "1.1.1.1"),
            ]))
        assert [c[0][0] for c in client.update.call_args_list] == ["Z1", "Z2"]

    def test_source_zone_not_mutated(self, svc):
        inst, client = svc
        zone = _zone()
        client.find.return_value = [zone]
        inst.apply_changes(Changes(delete=[_ep("www.example.com", "1.1.1.1")]))
        assert zone.records == (WWW,)


class TestDryRun:
    def test_no_commit(self, client):
        provider = SakuraCloudProvider(client, DomainFilter(), dry_run=True)
        provider.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        client.find.assert_called_once()
        client.update.assert_not_called()

    def test_mutations_still_computed(self, client):
        provider = SakuraCloudProvider(client, DomainFilter(), dry_run=True)
        planned = provider.plan_zone(
            _zone(), Changes(create=[_ep("api.example.com", "2.2.2.2")])
        )
        assert planned is not None
        assert len(planned.records) == 2


class TestPlanZone:
    def test_untouched_zone(self, svc):
        inst, _ = svc
        assert inst.plan_zone(_zone(), Changes(create=[_ep("a.example.org", "1.1.1.1")])) is None

    def test_pass_order(self, svc):
        inst, _ = svc
        ep = _ep("www.example.com", "1.1.1.1")
        # delete runs after update_new, so the record ends up absent
        planned = inst.plan_zone(_zone(), Changes(update_new=[ep], delete=[ep]))
        assert planned.records == ()

    def test_mutations_logged_with_change_tag(self, svc, caplog):
        inst, _ = svc
        caplog.set_level(logging.DEBUG, logger=zs_logger.logger.name)
        inst.plan_zone(_zone(), Changes(
            create=[_ep("api.example.com", "2.2.2.2")],
            delete=[_ep("www.example.com", "1.1.1.1")],
        ))
        tags = [getattr(r, "change", None) for r in caplog.records]
        assert "Create" in tags
        assert "Delete" in tags

    def test_endpoint_without_targets_leaves_zone_untouched(self, svc):
        inst, _ = svc
        assert inst.plan_zone(_zone(), Changes(create=[_ep("api.example.com")])) is None

    def test_targetless_endpoint_not_committed(self, svc):
        inst, client = svc
        client.find.return_value = [_zone(), _zone("Z2", "example.org", ())]
        inst.apply_changes(Changes(create=[
            _ep("api.example.com"),
            _ep("api.example.org", "2.2.2.2"),
        ]))
        assert [c[0][0] for c in client.update.call_args_list] == ["Z2"]


class TestCycleLogging:
    def test_one_cycle_id_per_apply(self, svc, caplog):
        inst, _ = svc
        caplog.set_level(logging.DEBUG, logger=zs_logger.logger.name)
        inst.apply_changes(Changes(
            create=[_ep("api.example.com", "2.2.2.2")],
            delete=[_ep("www.example.com", "1.1.1.1")],
        ))
        ids = {r.cycle_id for r in caplog.records if r.name == zs_logger.logger.name}
        assert len(ids) == 1
        tags = {getattr(r, "change", None) for r in caplog.records}
        assert {"Create", "Delete"} <= tags

    def test_separate_applies_get_separate_ids(self, svc, caplog):
        inst, _ = svc
        caplog.set_level(logging.DEBUG, logger=zs_logger.logger.name)
        inst.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        inst.apply_changes(Changes(create=[_ep("web.example.com", "3.3.3.3")]))
        ids = {r.cycle_id for r in caplog.records if r.name == zs_logger.logger.name}
        assert len(ids) == 2

    def test_commit_failure_logged_in_cycle(self, svc, caplog):
        inst, client = svc
        caplog.set_level(logging.DEBUG, logger=zs_logger.logger.name)
        client.update.side_effect = ProviderUnavailableError("boom")
        with pytest.raises(ProviderUnavailableError):
            inst.apply_changes(Changes(create=[_ep("api.example.com", "2.2.2.2")]))
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].zone == "example.com"
        assert errors[0].cycle_id == caplog.records[0].cycle_id


class TestOverHTTP:
    @staticmethod
    def _provider(handler) -> SakuraCloudProvider:
        config = SakuraCloudConfig(access_token="tok", access_token_secret="sec")
        dns_client = DNSClient(config)
        dns_client._client = httpx.Client(
            base_url=config.base_url, transport=httpx.MockTransport(handler)
        )
        return SakuraCloudProvider(dns_client, DomainFilter())

    def test_commit_with_bare_success_body(self):
        puts = []

        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json={"CommonServiceItems": [
                    {"ID": "Z1", "Name": "example.com", "Settings": {"DNS": {"ResourceRecordSets": [
                        {"Name": "www", "Type": "A", "RData": "1.1.1.1", "TTL": 300},
                    ]}}},
                    {"ID": "Z2", "Name": "example.org", "Settings": {"DNS": {"ResourceRecordSets": []}}},
                ]})
            puts.append(request.url.path.rsplit("/", 1)[-1])
            return httpx.Response(200, json={"Success": True})

        provider = self._provider(handler)
        provider.apply_changes(Changes(create=[
            _ep("a.example.com", "1.1.1.1"),
            _ep("a.example.org", "1.1.1.1"),
        ]))
        assert puts == ["Z1", "Z2"]

    def test_html_listing_is_provider_unavailable(self):
        provider = self._provider(lambda request: httpx.Response(200, text="<html></html>"))
        with pytest.raises(ProviderUnavailableError):
            provider.apply_changes(Changes(create=[_ep("a.example.com", "1.1.1.1")]))


class TestZoneContains:
    def test_substring(self):
        assert zone_contains(_zone(name="ple.com"), _ep("example.com"))
        assert zone_contains(_zone(), _ep("www.example.com"))
        assert not zone_contains(_zone(), _ep("www.example.org"))
