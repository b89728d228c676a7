"""
Frontier crawler: depth-bounded, round-indexed BFS over housing filings.

Each round expands the current frontier of property tasks and name tasks
against the registry and returns the next round's frontier:

- property task: registrations for a parcel -> contacts on each filing
  -> Person/Entity nodes, business Address nodes, name tasks
- name task: contact search by name -> registrations those contacts
  filed -> Property nodes, property tasks; then contacts sharing the
  name's business address -> more name tasks

Rounds are strict barriers. Every external call degrades to "no data"
on failure so one bad lookup never aborts the crawl.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

from ownergraph.crawler.frontier import (
    CrawlDeadline,
    CrawlLimits,
    CrawlState,
    Frontier,
    FrontierItem,
    NameTask,
    PropertyTask,
)
from ownergraph.graph.edges import Edge, EdgeRole
from ownergraph.graph.schema import Node, address_node, name_node, property_node
from ownergraph.graph.store import GraphStore
from ownergraph.ingestion.base_adapter import Contact, HousingRegistrySource, SourceError
from ownergraph.nyc.address import address_search_key, is_significant_address
from ownergraph.nyc.bbl import BBL
from ownergraph.nyc.names import (
    EntityClassifier,
    KeywordEntityClassifier,
    normalize_name,
    surname_token,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Names shorter than this are initials or filing noise
MIN_NAME_LENGTH = 3

_ROLE_SEPARATORS = re.compile(r"[\s_\-]+")


def is_site_manager(role: str) -> bool:
    """Site managers are building staff, not owners."""
    return "sitemanager" in _ROLE_SEPARATORS.sub("", (role or "").lower())


@dataclass
class CrawlResult:
    """The raw graph produced by one crawl."""

    store: GraphStore
    seed_id: str
    rounds_run: int = 0
    timed_out: bool = False
    failed_lookups: int = 0


class FrontierCrawler:
    """
    Builds an ownership graph outward from one seed parcel.

    The crawler itself holds no crawl state; every call to :meth:`crawl`
    starts from an empty graph, so one instance may serve concurrent
    requests.
    """

    def __init__(
        self,
        registry: HousingRegistrySource,
        classifier: Optional[EntityClassifier] = None,
        limits: Optional[CrawlLimits] = None,
    ):
        self.registry = registry
        self.classifier = classifier or KeywordEntityClassifier()
        self.limits = limits or CrawlLimits.from_settings()

    async def crawl(
        self,
        seed: BBL,
        max_depth: int = 2,
        deadline: Optional[CrawlDeadline] = None,
    ) -> CrawlResult:
        """
        Run up to ``max_depth`` rounds starting from ``seed``.

        If the deadline passes, the crawl stops and the graph built so far
        is returned with ``timed_out`` set.
        """
        run = _CrawlRun(self, max_depth)
        seed_node = run.store.add_node(property_node(seed))
        run.state.claim_property(seed)
        result = CrawlResult(store=run.store, seed_id=seed_node.id)
        deadline = deadline or CrawlDeadline()

        logger.info(f"Crawl started from {seed.key} (max_depth={max_depth})")

        frontier = Frontier(round_number=1, items=[PropertyTask(seed)])
        while frontier and frontier.round_number <= max_depth:
            if deadline.expired:
                result.timed_out = True
                break

            result.rounds_run = frontier.round_number
            logger.info(
                f"Round {frontier.round_number}: {len(frontier.property_tasks)} property tasks, "
                f"{len(frontier.name_tasks)} name tasks"
            )
            try:
                next_items = await asyncio.wait_for(
                    run.run_round(frontier), timeout=deadline.remaining()
                )
            except asyncio.TimeoutError:
                result.timed_out = True
                break

            frontier = Frontier(round_number=frontier.round_number + 1, items=next_items)

        if result.timed_out:
            logger.warning(
                f"Crawl from {seed.key} hit its deadline during round {result.rounds_run}; "
                f"returning partial graph"
            )

        result.failed_lookups = run.state.failed_lookups
        logger.info(
            f"Crawl from {seed.key} finished: {run.store.node_count} nodes, "
            f"{run.store.edge_count} edges, {result.rounds_run} rounds"
        )
        return result


class _CrawlRun:
    """Graph and visited sets for a single crawl invocation."""

    def __init__(self, crawler: FrontierCrawler, max_depth: int):
        self.registry = crawler.registry
        self.classifier = crawler.classifier
        self.limits = crawler.limits
        self.max_depth = max_depth
        self.store = GraphStore()
        self.state = CrawlState()

    @property
    def source(self) -> str:
        return self.registry.source_name

    async def run_round(self, frontier: Frontier) -> list[FrontierItem]:
        """Expand one frontier and return the next one."""
        property_tasks = frontier.property_tasks
        name_tasks = frontier.name_tasks

        if len(property_tasks) > self.limits.max_property_tasks:
            logger.debug(
                f"Round {frontier.round_number}: dropping "
                f"{len(property_tasks) - self.limits.max_property_tasks} property tasks over cap"
            )
        if len(name_tasks) > self.limits.max_name_tasks:
            logger.debug(
                f"Round {frontier.round_number}: dropping "
                f"{len(name_tasks) - self.limits.max_name_tasks} name tasks over cap"
            )

        next_items: list[FrontierItem] = []

        expanded = await asyncio.gather(
            *(self.expand_property(t) for t in property_tasks[: self.limits.max_property_tasks])
        )
        for items in expanded:
            next_items.extend(items)

        expanded = await asyncio.gather(
            *(
                self.expand_name(t, frontier.round_number)
                for t in name_tasks[: self.limits.max_name_tasks]
            )
        )
        for items in expanded:
            next_items.extend(items)

        return next_items

    async def try_lookup(
        self, branch: str, key: str, call: Awaitable[list[T]]
    ) -> Optional[list[T]]:
        """Await an adapter call, returning None if it failed."""
        try:
            return await call
        except SourceError as e:
            logger.warning(f"{branch} lookup for {key} failed: {e}")
        except Exception:
            logger.exception(f"{branch} lookup for {key} raised unexpectedly")
        self.state.failed_lookups += 1
        return None

    async def lookup(self, branch: str, key: str, call: Awaitable[list[T]]) -> list[T]:
        """Await an adapter call, degrading any failure to an empty result."""
        result = await self.try_lookup(branch, key, call)
        return result if result is not None else []

    def add_name(self, normalized: str) -> Node:
        return self.store.add_node(name_node(normalized, self.classifier.is_entity(normalized)))

    async def expand_property(self, task: PropertyTask) -> list[FrontierItem]:
        bbl = task.bbl
        registrations = await self.lookup(
            "registrations", bbl.key, self.registry.lookup_registrations(bbl)
        )

        prop = self.store.add_node(property_node(bbl))
        fresh = []
        for registration in registrations:
            prop.merge_attributes(
                {"address": registration.street_address, "zip": registration.zip}
            )
            if self.state.claim_registration(registration.registration_id):
                fresh.append(registration)

        contact_lists = await asyncio.gather(
            *(
                self.lookup(
                    "contacts", r.registration_id, self.registry.lookup_contacts(r.registration_id)
                )
                for r in fresh
            )
        )

        items: list[FrontierItem] = []
        for contacts in contact_lists:
            for contact in contacts:
                item = self.record_contact(contact, prop)
                if item is not None:
                    items.append(item)
        return items

    def record_contact(self, contact: Contact, prop: Node) -> Optional[NameTask]:
        """
        Link a filing contact to its property and business address.

        Returns a name task the first time the contact's name is seen.
        """
        if is_site_manager(contact.role):
            return None
        normalized = normalize_name(contact.display_name)
        if len(normalized) < MIN_NAME_LENGTH:
            return None

        name = self.add_name(normalized)
        self.store.add_edge(
            Edge(name.id, prop.id, source=self.source, role=contact.role or EdgeRole.CONTACT)
        )

        business = contact.business_address
        key = business.key if business else ""
        if is_significant_address(key):
            address = self.store.add_node(address_node(key, display=business.readable))
            self.store.add_edge(
                Edge(name.id, address.id, source=self.source, role=EdgeRole.BUSINESS_ADDRESS)
            )

        if self.state.claim_name(normalized):
            return NameTask(normalized)
        return None

    async def expand_name(self, task: NameTask, round_number: int) -> list[FrontierItem]:
        normalized = task.normalized_name
        is_entity = self.classifier.is_entity(normalized)
        term = normalized if is_entity else surname_token(normalized)

        contacts = await self.lookup(
            "name search",
            normalized,
            self.registry.lookup_contacts_by_name(term, business=is_entity),
        )
        if not contacts:
            return []

        name = self.store.add_node(name_node(normalized, is_entity))
        items: list[FrontierItem] = []

        # Claimed before the fetch so a concurrent name task skips them
        registration_ids = [
            rid
            for rid in dict.fromkeys(c.registration_id for c in contacts if c.registration_id)
            if rid not in self.state.visited_registrations
        ][: self.limits.registration_batch_size]
        for rid in registration_ids:
            self.state.claim_registration(rid)

        registrations = []
        if registration_ids:
            registrations = await self.try_lookup(
                "registration batch",
                normalized,
                self.registry.lookup_registrations_by_id(registration_ids),
            )
            if registrations is None:
                # Release the claim so another name task can still fetch them
                self.state.visited_registrations.difference_update(registration_ids)
                registrations = []

        for registration in registrations:
            self.state.visited_registrations.add(registration.registration_id)
            bbl = registration.bbl
            if not bbl.is_complete:
                continue
            prop = self.store.add_node(
                property_node(bbl, address=registration.street_address, zip=registration.zip)
            )
            self.store.add_edge(
                Edge(name.id, prop.id, source=self.source, role=EdgeRole.REGISTRATION)
            )
            if self.state.claim_property(bbl):
                items.append(PropertyTask(bbl))

        if round_number < self.max_depth:
            addresses: dict[str, str] = {}
            for contact in contacts:
                business = contact.business_address
                key = business.key if business else ""
                if is_significant_address(key) and key not in addresses:
                    addresses[key] = business.readable
            for key in list(addresses)[: self.limits.max_shared_addresses]:
                items.extend(await self.expand_shared_address(key, addresses[key]))

        return items

    async def expand_shared_address(self, key: str, display: str) -> list[FrontierItem]:
        """Find other contacts filed with the same business address."""
        search = address_search_key(key)
        if search is None:
            return []

        contacts = await self.lookup(
            "address search",
            key,
            self.registry.lookup_contacts_by_address(search.street_number, search.street_prefix),
        )
        if not contacts:
            return []

        address = self.store.add_node(address_node(key, display=display))
        items: list[FrontierItem] = []
        seen: set[str] = set()
        for contact in contacts:
            if is_site_manager(contact.role):
                continue
            normalized = normalize_name(contact.display_name)
            if len(normalized) < MIN_NAME_LENGTH or normalized in seen:
                continue
            seen.add(normalized)

            other = self.add_name(normalized)
            self.store.add_edge(
                Edge(other.id, address.id, source=self.source, role=EdgeRole.SHARED_BUSINESS_ADDRESS)
            )
            if self.state.claim_name(normalized):
                items.append(NameTask(normalized))
        return items
