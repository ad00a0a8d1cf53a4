"""Shared test fixtures."""

import pytest

SAMPLE_RTX_CONFIG = """#
# Admin
#
login password test-login-password-123
administrator password test-admin-password-456
login user testuser encrypted TESTENCRYPTEDHASH123456789
timezone +09:00
console character ja.utf8

httpd host any
sshd service on

#
# WAN connection
#
description lan2 test-wan
ip lan2 address 198.51.100.1/24
ip lan2 nat descriptor 1000
ip lan2 secure filter in 200020 200099
ip lan2 secure filter out 200099 dynamic 200080 200081

ip route default gateway 198.51.100.254
ip route 10.0.0.0/8 gateway 192.0.2.1
ip lan1 address 192.0.2.253/24

dhcp service server
dhcp scope 1 192.0.2.100-192.0.2.199/24 gateway 192.0.2.253 expire 12:00
dns server select 500000 8.8.8.8 edns=on 8.8.4.4 edns=on any .

#
# Tunnels
#
pp select anonymous
 pp bind tunnel1
 pp auth request mschap-v2
 pp auth username vpnuser test-vpn-password-789
 ppp ipcp ipaddress on
 pp enable anonymous

tunnel select 1
 tunnel encapsulation l2tpv3
 tunnel endpoint name test.example.com fqdn
 ipsec tunnel 101
  ipsec sa policy 101 1 esp aes-cbc sha-hmac
  ipsec ike pre-shared-key 1 text test-ike-psk-secret
  ipsec ike remote address 1 test.example.com
 l2tp tunnel auth on test-l2tp-auth-secret
 tunnel enable 1

#
# Filters
#
ip filter 200020 reject * * udp,tcp 135 *
ip filter 200099 pass * * * * *
ip filter dynamic 200080 * * ftp
ip filter dynamic 200081 * * www

nat descriptor type 1000 masquerade
nat descriptor masquerade static 1000 1 192.0.2.253 tcp 22
"""

# A dump as captured from an 80-column terminal session.
WRAPPED_RTX_CONFIG = (
    "ip lan2 secure filter in 200020 200021 200022 200023 200024 200025 20002\r\n"
    "6 200027\r\n"
    " 200028 200099\r\n"
    "dns server select 1 192.0.2.10 edns\r\n"
    "=on any example.local\r\n"
    "tunnel select 1\r\n"
    " tunnel enable 1\r\n"
)


@pytest.fixture
def rtx_config():
    return SAMPLE_RTX_CONFIG


@pytest.fixture
def wrapped_config():
    return WRAPPED_RTX_CONFIG


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "rtx1210.txt"
    path.write_text(SAMPLE_RTX_CONFIG)
    return path
