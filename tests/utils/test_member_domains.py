from app.utils.member_domains import (
    domain_from_email,
    domain_matches,
    is_member_email,
    normalize_domain,
    unique_domains,
)


def test_subdomain_matches_registered_domain():
    assert domain_matches("sub.example.com", "example.com")
    assert domain_matches("example.com", "example.com")


def test_parent_domain_does_not_match_subdomain():
    assert not domain_matches("example.com", "sub.example.com")


def test_unrelated_domains_never_match():
    assert not domain_matches("notexample.com", "example.com")
    assert not domain_matches("example.com.evil.org", "example.com")
    assert not domain_matches("", "example.com")


def test_is_member_email():
    domains = ["@Example.com", "member.co.jp"]
    assert is_member_email("user@mail.EXAMPLE.com", domains)
    assert is_member_email("user@member.co.jp", domains)
    assert not is_member_email("user@other.co.jp", domains)
    assert not is_member_email("no-at-sign", domains)


def test_domain_helpers():
    assert domain_from_email("a@B.com") == "b.com"
    assert domain_from_email("nothing") == ""
    assert normalize_domain("  @Foo.COM ") == "foo.com"
    assert unique_domains(["a.com", "A.com", "", "@b.com"]) == ["a.com", "b.com"]
