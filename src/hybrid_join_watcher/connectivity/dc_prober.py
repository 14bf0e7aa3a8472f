"""
Domain controller connectivity prober.

Locates the domain controllers of an Active Directory domain through their
LDAP locator SRV records and checks that at least one of them answers both
ping and a TCP connection on the LDAP port.
"""

import logging
import platform
import socket
import subprocess  # nosec B404
from dataclasses import dataclass
from typing import List, Optional

import dns.exception
import dns.resolver

from src.i18n import _

logger = logging.getLogger(__name__)

LDAP_PORT = 389


@dataclass(frozen=True)
class DomainControllerRecord:
    """A domain controller target taken from an SRV answer."""

    hostname: str
    port: int = LDAP_PORT
    priority: int = 0
    weight: int = 0


@dataclass(frozen=True)
class ReachabilityResult:
    """Outcome of probing a single domain controller."""

    hostname: str
    ping_ok: bool
    tcp_ok: bool

    @property
    def success(self) -> bool:
        return self.ping_ok and self.tcp_ok


def locator_name(domain: str) -> str:
    """SRV name under which a domain publishes its LDAP domain controllers."""
    return f"_ldap._tcp.dc._msdcs.{domain.strip().rstrip('.')}"


class SrvLocator:
    """Resolves domain controller SRV records with dnspython."""

    def __init__(
        self, timeout: float = 10.0, resolver: Optional[dns.resolver.Resolver] = None
    ):
        self.timeout = timeout
        self.resolver = resolver

    def lookup(self, domain: str) -> List[DomainControllerRecord]:
        """Return the domain controllers for a domain in resolution order."""
        name = locator_name(domain)
        try:
            if self.resolver is None:
                self.resolver = dns.resolver.Resolver()
            answers = self.resolver.resolve(name, "SRV", lifetime=self.timeout)
        except dns.exception.DNSException as error:
            logger.debug("SRV lookup for %s failed: %s", name, error)
            return []

        return [
            DomainControllerRecord(
                hostname=rdata.target.to_text(omit_final_dot=True),
                port=rdata.port,
                priority=rdata.priority,
                weight=rdata.weight,
            )
            for rdata in answers
        ]


class ReachabilityChecker:
    """Ping and TCP connectivity checks against a single host."""

    def __init__(self, ping_count: int = 2, tcp_timeout: float = 5.0):
        self.ping_count = ping_count
        self.tcp_timeout = tcp_timeout

    def ping(self, hostname: str) -> bool:
        """Send a fixed number of ICMP echo requests; True if the host replied."""
        if platform.system() == "Windows":
            command = ["ping", "-n", str(self.ping_count), "-w", "1000", hostname]
        else:
            command = ["ping", "-c", str(self.ping_count), "-W", "1", hostname]

        try:
            result = subprocess.run(  # nosec B603, B607
                command,
                capture_output=True,
                timeout=self.ping_count * 2 + 5,
                check=False,
            )
        except (subprocess.TimeoutExpired, OSError) as error:
            logger.debug("Ping of %s failed: %s", hostname, error)
            return False
        return result.returncode == 0

    def tcp(self, hostname: str, port: int = LDAP_PORT) -> bool:
        """True if a TCP connection to the port can be established."""
        try:
            with socket.create_connection((hostname, port), timeout=self.tcp_timeout):
                return True
        except OSError as error:
            logger.debug("TCP connection to %s:%d failed: %s", hostname, port, error)
            return False


class DomainControllerProber:
    """Answers whether any domain controller of a domain is reachable."""

    def __init__(
        self,
        locator: SrvLocator,
        checker: ReachabilityChecker,
        port: int = LDAP_PORT,
    ):
        self.locator = locator
        self.checker = checker
        self.port = port

    def probe(self, record: DomainControllerRecord) -> ReachabilityResult:
        """Run both checks against one domain controller and log the outcome."""
        ping_ok = self.checker.ping(record.hostname)
        tcp_ok = self.checker.tcp(record.hostname, self.port)
        result = ReachabilityResult(record.hostname, ping_ok, tcp_ok)

        if result.success:
            logger.info(_("Domain controller %s is reachable"), record.hostname)
        else:
            logger.info(
                _("Domain controller %s is not reachable (ping: %s, LDAP port %d: %s)"),
                record.hostname,
                ping_ok,
                self.port,
                tcp_ok,
            )
        return result

    def is_reachable(self, domain: str, exhaustive: bool = False) -> bool:
        """
        Check domain controller reachability for a domain.

        Without exhaustive, returns as soon as one controller passes both
        checks. With exhaustive, every controller is probed.
        """
        records = self.locator.lookup(domain)
        if not records:
            logger.warning(_("No domain controllers found for %s"), domain)
            return False

        reachable = False
        for record in records:
            if self.probe(record).success:
                reachable = True
                if not exhaustive:
                    break
        return reachable
