"""Tests for the UDM field mapper."""

from logstash_udm.parsers.pipeline import compile_and_match
from logstash_udm.udm.mapper import (
    UDMFieldMapper,
    first_present,
    map_to_event,
    strip_quotes,
    to_int,
)

from tests.conftest import grok_config


class TestHelpers:
    def test_first_present_skips_missing_and_empty(self):
        fields = {"client_ip": "", "source_ip": "3.3.3.3"}
        assert first_present(fields, ("client_ip", "src_ip", "source_ip")) == "3.3.3.3"
        assert first_present(fields, ("dst_ip",)) is None

    def test_to_int(self):
        assert to_int("404") == 404
        assert to_int(" 80 ") == 80
        assert to_int("-1") == -1
        assert to_int("0") == 0

    def test_to_int_invalid_is_none_not_zero(self):
        assert to_int("abc") is None
        assert to_int("12abc") is None
        assert to_int("1_000") is None
        assert to_int("") is None
        assert to_int(None) is None

    def test_to_int_oversized_digit_run_is_none(self):
        assert to_int("9" * 5000) is None
        assert to_int("-" + "1" * 5000) is None
        assert to_int("1" * 21) is None
        assert to_int("1" * 20) == int("1" * 20)

    def test_oversized_response_code_does_not_raise(self):
        fields = compile_and_match(
            "status " + "9" * 5000, grok_config("status %{NUMBER:response_code}")
        )
        event = map_to_event(fields)
        assert "network" not in event
        assert event["security_result"] == [
            {"action": "UNKNOWN", "severity": "UNKNOWN", "category": "HTTP_REQUEST"},
        ]
        assert event["additional"]["parsed_fields"]["response_code"] == "9" * 5000

    def test_strip_quotes(self):
        assert strip_quotes('"Mozilla/5.0"') == "Mozilla/5.0"
        assert strip_quotes('"half') == "half"
        assert strip_quotes("plain") == "plain"
        assert strip_quotes('""quoted""') == '"quoted"'
        assert strip_quotes(None) is None


class TestMetadata:
    def setup_method(self):
        self.mapper = UDMFieldMapper()

    def test_timestamp_normalized(self):
        event = self.mapper.map({"timestamp": "24/Apr/2017:21:22:23 -0700"})
        assert event["metadata"]["event_timestamp"].startswith("2017-04-24T21:22:23")

    def test_at_timestamp_wins(self):
        event = self.mapper.map({
            "@timestamp": "2020-01-01T00:00:00Z",
            "timestamp": "24/Apr/2017:21:22:23 -0700",
        })
        assert event["metadata"]["event_timestamp"] == "2020-01-01T00:00:00Z"

    def test_http_event_type(self):
        event = self.mapper.map({"http_method": "GET", "response_code": "200"})
        assert event["metadata"]["event_type"] == "NETWORK_HTTP"

    def test_parsed_fields_preserved(self):
        fields = {"field1": "value1", "field2": "value2"}
        event = self.mapper.map(fields)
        assert event["additional"]["parsed_fields"] == fields

    def test_parsed_fields_are_a_copy(self):
        fields = {"client_ip": "1.1.1.1"}
        event = self.mapper.map(fields)
        fields["client_ip"] = "changed"
        assert event["additional"]["parsed_fields"] == {"client_ip": "1.1.1.1"}

    def test_parsed_fields_kept_verbatim_with_empty_values(self):
        fields = {"empty": "", "client_ip": "1.1.1.1"}
        event = self.mapper.map(fields)
        assert event["additional"]["parsed_fields"] == {"empty": "", "client_ip": "1.1.1.1"}


class TestEntities:
    def setup_method(self):
        self.mapper = UDMFieldMapper()

    def test_principal_ip_is_list(self):
        event = self.mapper.map({"client_ip": "192.168.1.1"})
        assert event["principal"]["ip"] == ["192.168.1.1"]

    def test_principal_hostname(self):
        assert self.mapper.map({"client_hostname": "web01"})["principal"]["hostname"] == "web01"

    def test_principal_user(self):
        assert self.mapper.map({"username": "john"})["principal"]["user"] == {"userid": "john"}

    def test_user_alias_order(self):
        event = self.mapper.map({"ident": "-", "username": "john", "user": "root"})
        assert event["principal"]["user"]["userid"] == "root"

    def test_ip_alias_order(self):
        event = self.mapper.map({"source_ip": "3.3.3.3", "src_ip": "2.2.2.2", "client_ip": "1.1.1.1"})
        assert event["principal"]["ip"] == ["1.1.1.1"]

    def test_target_fields(self):
        event = self.mapper.map({
            "dest_ip": "10.0.0.1",
            "target_hostname": "db01",
            "target_port": "5432",
            "request_url": "https://example.com/a",
        })
        assert event["target"] == {
            "hostname": "db01",
            "ip": ["10.0.0.1"],
            "port": 5432,
            "url": "https://example.com/a",
        }

    def test_principal_and_target(self):
        event = self.mapper.map({
            "client_ip": "1.1.1.1",
            "dst_ip": "2.2.2.2",
            "src_port": "5000",
            "dst_port": "80",
        })
        assert event["principal"]["ip"] == ["1.1.1.1"]
        assert event["principal"]["port"] == 5000
        assert event["target"]["ip"] == ["2.2.2.2"]
        assert event["target"]["port"] == 80

    def test_invalid_port_left_unset(self):
        event = self.mapper.map({"src_port": "http"})
        assert "principal" not in event

    def test_port_zero_is_kept(self):
        assert self.mapper.map({"dst_port": "0"})["target"]["port"] == 0


class TestHttp:
    def setup_method(self):
        self.mapper = UDMFieldMapper()

    def test_method(self):
        assert self.mapper.map({"http_method": "POST"})["network"]["http"]["method"] == "POST"
        assert self.mapper.map({"method": "PUT"})["network"]["http"]["method"] == "PUT"

    def test_response_code_is_int(self):
        event = self.mapper.map({"response_code": "404"})
        assert event["network"]["http"]["response_code"] == 404

    def test_status_code_aliases(self):
        assert self.mapper.map({"status_code": "301"})["network"]["http"]["response_code"] == 301
        assert self.mapper.map({"http_status": "502"})["network"]["http"]["response_code"] == 502

    def test_user_agent_and_referer_quotes_stripped(self):
        event = self.mapper.map({"user_agent": '"Mozilla/5.0"', "referrer": '"http://google.com"'})
        assert event["network"]["http"]["user_agent"] == "Mozilla/5.0"
        assert event["network"]["http"]["referer"] == "http://google.com"

    def test_referer_alias(self):
        assert self.mapper.map({"referer": "http://a.b"})["network"]["http"]["referer"] == "http://a.b"

    def test_empty_quoted_string_pruned(self):
        event = self.mapper.map({"useragent": '""'})
        assert "network" not in event

    def test_non_numeric_response_code(self):
        event = self.mapper.map({"response_code": "abc"})
        assert "network" not in event
        assert event["security_result"] == [
            {"action": "UNKNOWN", "severity": "UNKNOWN", "category": "HTTP_REQUEST"},
        ]


class TestMapToEvent:
    def test_response_code_classified(self):
        event = map_to_event({"response_code": "200"})
        assert event["security_result"] == [
            {"action": "ALLOW", "severity": "INFO", "category": "HTTP_REQUEST"},
        ]
        assert event["metadata"]["event_type"] == "NETWORK_HTTP"

    def test_forbidden_is_medium(self):
        event = map_to_event({"response_code": "403"})
        assert event["security_result"][0]["action"] == "BLOCK"
        assert event["security_result"][0]["severity"] == "MEDIUM"

    def test_unrecognized_fields_only_keep_parsed_fields(self):
        fields = {"foo": "bar", "baz": "qux"}
        assert map_to_event(fields) == {"additional": {"parsed_fields": fields}}

    def test_empty_field_map(self):
        assert map_to_event({}) == {"additional": {"parsed_fields": {}}}

    def test_no_security_result_without_response_code(self):
        event = map_to_event({"http_method": "GET"})
        assert "security_result" not in event

    def test_user_login(self):
        event = map_to_event({"user": "alice", "src_ip": "10.0.0.9"})
        assert event["metadata"]["event_type"] == "USER_LOGIN"
        assert event["principal"] == {"ip": ["10.0.0.9"], "user": {"userid": "alice"}}
