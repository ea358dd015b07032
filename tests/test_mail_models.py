"""Unit tests for mail models and exceptions."""

from dataclasses import FrozenInstanceError
from enum import Enum

import pytest

from src.mail import (
    ApiError,
    ApiErrors,
    EmailAddress,
    EmailRequest,
    EmptyRecipientGroupError,
    HtmlAndTextBody,
    InvalidEmailAddressError,
    MailError,
    NamedAddress,
    NamedRecipients,
    PartKind,
    PlainRecipients,
    Success,
    TextBody,
    UnparseableResponse,
    WirePart,
    make_request,
    make_single_recipient_request,
)


def addr(value: str) -> EmailAddress:
    return EmailAddress.parse(value)


class Category(Enum):
    TRANSACTIONAL = "transactional"
    MARKETING = "marketing"


class TestEmailAddress:
    """Tests for EmailAddress parsing."""

    def test_parse_valid(self):
        address = addr("alex@example.com")
        assert address.local_part == "alex"
        assert address.domain == "example.com"
        assert str(address) == "alex@example.com"

    def test_to_bytes(self):
        assert addr("eric+2@example.com").to_bytes() == b"eric+2@example.com"

    def test_splits_on_last_at(self):
        address = addr('"odd@local"@example.com')
        assert address.domain == "example.com"

    @pytest.mark.parametrize(
        "value",
        ["", "no-at-sign", "@example.com", "alex@", "alex @example.com", "alex@.example.com"],
    )
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(InvalidEmailAddressError) as exc_info:
            EmailAddress.parse(value)
        assert exc_info.value.value == value

    def test_invalid_address_is_value_error(self):
        with pytest.raises(ValueError):
            EmailAddress.parse("nope")

    def test_equality(self):
        assert addr("a@example.com") == EmailAddress("a", "example.com")


class TestRecipientGroups:
    """Tests for NamedRecipients and PlainRecipients."""

    def test_plain_of(self):
        group = PlainRecipients.of(addr("a@example.com"), addr("b@example.com"))
        assert len(group) == 2
        assert [str(a) for a in group] == ["a@example.com", "b@example.com"]

    def test_named_of(self):
        group = NamedRecipients.of(NamedAddress(addr("a@example.com"), "A"))
        assert len(group) == 1
        assert group.entries[0].display_name == "A"

    def test_empty_plain_rejected(self):
        with pytest.raises(EmptyRecipientGroupError):
            PlainRecipients(addresses=())

    def test_empty_named_rejected(self):
        with pytest.raises(EmptyRecipientGroupError):
            NamedRecipients.of()

    def test_empty_group_error_hierarchy(self):
        with pytest.raises(MailError):
            PlainRecipients.of()

    def test_empty_iterator_rejected(self):
        with pytest.raises(EmptyRecipientGroupError):
            PlainRecipients(addresses=iter(()))

    def test_iterable_stored_as_tuple(self):
        group = NamedRecipients(entries=(NamedAddress(addr(a), a) for a in ["a@example.com"]))
        assert isinstance(group.entries, tuple)
        assert len(group) == 1

    def test_list_copied_at_construction(self):
        addresses = [addr("a@example.com")]
        group = PlainRecipients(addresses=addresses)
        addresses.append(addr("b@example.com"))
        assert group.addresses == (addr("a@example.com"),)

    def test_to_plain_keeps_order(self):
        group = NamedRecipients.of(
            NamedAddress(addr("b@example.com"), "B"),
            NamedAddress(addr("a@example.com"), "A"),
        )
        plain = group.to_plain()
        assert isinstance(plain, PlainRecipients)
        assert [str(a) for a in plain] == ["b@example.com", "a@example.com"]

    def test_groups_are_immutable(self):
        group = PlainRecipients.of(addr("a@example.com"))
        with pytest.raises(FrozenInstanceError):
            group.addresses = ()  # type: ignore[misc]


class TestEmailRequest:
    """Tests for EmailRequest construction and replace operations."""

    @pytest.fixture
    def request_(self):
        return make_request(
            PlainRecipients.of(addr("to@example.com")),
            "Subject",
            TextBody("Body"),
            addr("from@example.com"),
        )

    def test_make_request_defaults(self, request_):
        assert request_.cc is None
        assert request_.bcc is None
        assert request_.sender_name is None
        assert request_.reply_to is None
        assert request_.send_at is None
        assert request_.attachments == ()
        assert request_.inline_content == ()
        assert request_.custom_headers == ()
        assert request_.categories == ()
        assert request_.template_id is None
        assert request_.unsubscribe_group_id is None
        assert request_.unsubscribe_group_ids_for_preference_page == ()
        assert request_.custom_metadata is None

    def test_make_single_recipient_request(self):
        request = make_single_recipient_request(
            addr("to@example.com"),
            "Hi",
            HtmlAndTextBody("<p>Hi</p>", "Hi"),
            addr("from@example.com"),
        )
        assert request.to == PlainRecipients.of(addr("to@example.com"))
        assert request.subject == "Hi"

    def test_with_cc_replaces_style(self, request_):
        with_plain = request_.with_cc(PlainRecipients.of(addr("cc@example.com")))
        named = NamedRecipients.of(NamedAddress(addr("cc1@example.com"), "Foo"))
        with_named = with_plain.with_cc(named)

        assert with_named.cc == named
        assert isinstance(with_plain.cc, PlainRecipients)
        assert request_.cc is None

    def test_with_bcc_none_clears(self, request_):
        with_bcc = request_.with_bcc(PlainRecipients.of(addr("bcc@example.com")))
        assert with_bcc.with_bcc(None).bcc is None

    def test_with_to(self, request_):
        group = PlainRecipients.of(addr("other@example.com"))
        assert request_.with_to(group).to == group

    def test_request_is_immutable(self, request_):
        with pytest.raises(FrozenInstanceError):
            request_.subject = "Changed"  # type: ignore[misc]

    def test_sequences_frozen_at_construction(self):
        categories = ["a"]
        headers = [["X-A", "1"]]
        custom = {"k": "v"}
        request = EmailRequest(
            to=PlainRecipients.of(addr("to@example.com")),
            subject="S",
            body=TextBody("B"),
            sender=addr("from@example.com"),
            categories=categories,
            attachments=[],
            custom_headers=headers,
            unsubscribe_group_ids_for_preference_page=(g for g in [1, 2]),
            custom_metadata=custom,
        )
        categories.append("b")
        headers[0][1] = "2"
        custom["k"] = "changed"

        assert request.categories == ("a",)
        assert request.attachments == ()
        assert request.custom_headers == (("X-A", "1"),)
        assert request.unsubscribe_group_ids_for_preference_page == (1, 2)
        assert request.custom_metadata == {"k": "v"}

    def test_generic_category(self):
        request: EmailRequest[Category] = EmailRequest(
            to=PlainRecipients.of(addr("to@example.com")),
            subject="S",
            body=TextBody("B"),
            sender=addr("from@example.com"),
            categories=(Category.TRANSACTIONAL,),
        )
        assert request.categories == (Category.TRANSACTIONAL,)


class TestWirePart:
    """Tests for WirePart kinds."""

    def test_text_kind(self):
        part = WirePart.text("subject", "Hello")
        assert part.kind == PartKind.TEXT
        assert part.to_bytes() == b"Hello"

    def test_raw_kind(self):
        assert WirePart.raw("from", b"a@example.com").kind == PartKind.BYTES

    def test_file_kind(self):
        part = WirePart.file("files[a.txt]", "a.txt", b"data")
        assert part.kind == PartKind.FILE
        assert part.filename == "a.txt"


class TestApiOutcomes:
    """Tests for outcome serialization."""

    def test_success(self):
        assert Success().is_success
        assert Success().to_dict() == {"outcome": "success"}

    def test_api_errors(self):
        outcome = ApiErrors(status_code=400, errors=(ApiError("Bad", "to"),))
        assert not outcome.is_success
        assert outcome.to_dict() == {
            "outcome": "api_errors",
            "status_code": 400,
            "errors": [{"message": "Bad", "field": "to"}],
        }

    def test_unparseable(self):
        outcome = UnparseableResponse(raw_body=b"oops")
        assert not outcome.is_success
        assert outcome.to_dict()["raw_body"] == "oops"
