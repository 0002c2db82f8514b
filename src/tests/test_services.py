"""Decision service, engine, ownership and publish governor tests (no database)."""

from __future__ import annotations

from types import SimpleNamespace

from django.test import SimpleTestCase

from access_control.catalog import Action, ContentStatus, PermissionValue, Resource, Role
from access_control.exceptions import IDENTITY_UNRESOLVED, MISSING_PERMISSION, NOT_OWNER, AuthorizationDenied
from access_control.identity import IdentityResolver
from access_control.ownership import OwnershipQuery, OwnershipResolver
from access_control.permissions import RBACPermission, resolve_action
from access_control.services import (
    AuthorizationDecision,
    AuthorizationEngine,
    AuthorizationService,
    PublishGovernor,
)
from tests.utils import SpyStore, identity


def article(resource_id) -> OwnershipQuery:
    return OwnershipQuery(
        table="content_article", id_column="id", resource_id=resource_id, owner_column="owner_id"
    )


def build_service(store: SpyStore) -> AuthorizationService:
    return AuthorizationService(
        engine=AuthorizationEngine(),
        identity_resolver=IdentityResolver(store),
        ownership_resolver=OwnershipResolver(store),
    )


class AuthorizationEngineTests(SimpleTestCase):
    def setUp(self):
        self.engine = AuthorizationEngine()

    def test_unknown_role_behaves_like_viewer(self):
        for resource in Resource:
            for action in Action:
                with self.subTest(resource=resource, action=action):
                    self.assertEqual(
                        self.engine.decide("bogus", resource, action),
                        self.engine.decide("viewer", resource, action),
                    )

    def test_missing_role_claim_behaves_like_viewer(self):
        self.assertEqual(self.engine.decide(None, "articles", "read"), PermissionValue.ALLOW)
        self.assertEqual(self.engine.decide(None, "articles", "create"), PermissionValue.DENY)
        self.assertEqual(self.engine.decide("", "users", "list"), PermissionValue.DENY)

    def test_known_roles_are_not_rewritten(self):
        self.assertEqual(self.engine.decide("admin", "users", "delete"), PermissionValue.ALLOW)
        self.assertEqual(self.engine.decide("content_specialist", "news", "update"), PermissionValue.ALLOW_IF_OWNER)


class OwnershipResolverTests(SimpleTestCase):
    def test_is_owner_coerces_numbers(self):
        self.assertTrue(OwnershipResolver.is_owner(7, 7))
        self.assertTrue(OwnershipResolver.is_owner("7", 7))
        self.assertTrue(OwnershipResolver.is_owner(7, "7"))
        self.assertFalse(OwnershipResolver.is_owner(7, 9))

    def test_none_or_garbage_is_never_owner(self):
        self.assertFalse(OwnershipResolver.is_owner(None, None))
        self.assertFalse(OwnershipResolver.is_owner(None, 7))
        self.assertFalse(OwnershipResolver.is_owner(7, None))
        self.assertFalse(OwnershipResolver.is_owner("abc", "abc"))

    def test_fetch_owner_id_is_a_single_read(self):
        store = SpyStore(owners={42: 7})
        resolver = OwnershipResolver(store)
        self.assertEqual(resolver.fetch_owner_id(article(42)), 7)
        self.assertIsNone(resolver.fetch_owner_id(article(1000)))
        self.assertEqual(len(store.ownership_reads), 2)


class CheckSimpleTests(SimpleTestCase):
    def setUp(self):
        self.store = SpyStore()
        self.service = build_service(self.store)

    def test_allow_is_authorized(self):
        self.assertEqual(
            self.service.check_simple("content_specialist", "articles", "create"),
            AuthorizationDecision(authorized=True),
        )

    def test_ownership_permission_is_not_enough(self):
        decision = self.service.check_simple("content_specialist", "articles", "update")
        self.assertFalse(decision.authorized)
        self.assertEqual(decision.denial_reason, MISSING_PERMISSION)

    def test_deny_is_missing_permission(self):
        decision = self.service.check_simple("viewer", "articles", "create")
        self.assertEqual(decision, AuthorizationDecision(authorized=False, denial_reason=MISSING_PERMISSION))
        self.assertEqual(self.store.identity_reads, [])


class PrecheckTests(SimpleTestCase):
    """The pre-load gate for update/delete makes no reads."""

    def setUp(self):
        self.store = SpyStore(users={"specialist@example.com": 7}, owners={42: 7})
        self.service = build_service(self.store)

    def test_ownership_grant_passes(self):
        self.assertTrue(self.service.precheck("content_specialist", "articles", "update").authorized)
        self.assertTrue(self.service.precheck("admin", "users", "delete").authorized)

    def test_deny_and_unknown_role_are_rejected(self):
        for role in ("viewer", "superuser", None):
            with self.subTest(role=role):
                decision = self.service.precheck(role, "articles", "delete")
                self.assertEqual(decision, AuthorizationDecision(authorized=False, denial_reason=MISSING_PERMISSION))
        self.assertEqual(self.store.identity_reads, [])
        self.assertEqual(self.store.ownership_reads, [])


class RBACPermissionTests(SimpleTestCase):
    """Viewset actions outside the catalog mapping are refused."""

    def test_unmapped_viewset_action_is_denied(self):
        request = SimpleNamespace(user=identity(Role.ADMIN, "admin@example.com"))
        view = SimpleNamespace(resource="articles", action="archive")
        self.assertIsNone(resolve_action(view))
        with self.assertRaises(AuthorizationDenied) as ctx:
            RBACPermission().has_permission(request, view)
        self.assertEqual(ctx.exception.reason, MISSING_PERMISSION)

    def test_viewset_actions_map_to_catalog_actions(self):
        self.assertEqual(resolve_action(SimpleNamespace(action="partial_update")), Action.UPDATE)
        self.assertEqual(resolve_action(SimpleNamespace(action="destroy")), Action.DELETE)
        self.assertEqual(resolve_action(SimpleNamespace(action="list")), Action.LIST)

    def test_view_without_resource_is_refused(self):
        request = SimpleNamespace(user=identity(Role.ADMIN, "admin@example.com"))
        self.assertFalse(RBACPermission().has_permission(request, SimpleNamespace(action="list")))


class CheckWithOwnershipTests(SimpleTestCase):
    """Ownership-gated decisions against a spy store."""

    def setUp(self):
        self.store = SpyStore(
            users={"specialist@example.com": 7, "admin@example.com": 1},
            owners={42: 7, 99: 9, 500: None},
        )
        self.service = build_service(self.store)
        self.specialist = identity(Role.CONTENT_SPECIALIST, "specialist@example.com")

    def test_owner_is_authorized(self):
        decision = self.service.check_with_ownership(self.specialist, "articles", "update", article(42))
        self.assertEqual(decision, AuthorizationDecision(authorized=True, owner_id=7))

    def test_non_owner_is_denied(self):
        decision = self.service.check_with_ownership(self.specialist, "articles", "update", article(99))
        self.assertFalse(decision.authorized)
        self.assertEqual(decision.denial_reason, NOT_OWNER)
        self.assertEqual(decision.owner_id, 7)

    def test_deny_performs_no_reads(self):
        viewer = identity(Role.VIEWER, "specialist@example.com")
        decision = self.service.check_with_ownership(viewer, "articles", "delete", article(42))
        self.assertEqual(decision.denial_reason, MISSING_PERMISSION)
        self.assertEqual(self.store.ownership_reads, [])
        self.assertEqual(self.store.identity_reads, [])

    def test_unknown_role_is_denied_without_reads(self):
        forged = identity("superuser", "specialist@example.com")
        decision = self.service.check_with_ownership(forged, "articles", "update", article(42))
        self.assertEqual(decision.denial_reason, MISSING_PERMISSION)
        self.assertEqual(self.store.ownership_reads, [])

    def test_unresolved_identity_is_denied_even_when_owner_is_null(self):
        stranger = identity(Role.CONTENT_SPECIALIST, "nobody@example.com")
        for resource_id in (42, 500, 1000):
            with self.subTest(resource_id=resource_id):
                decision = self.service.check_with_ownership(stranger, "articles", "update", article(resource_id))
                self.assertFalse(decision.authorized)
                self.assertEqual(decision.denial_reason, IDENTITY_UNRESOLVED)
        self.assertEqual(self.store.ownership_reads, [])

    def test_missing_email_is_identity_unresolved(self):
        anonymous = identity(Role.CONTENT_SPECIALIST, None)
        decision = self.service.check_with_ownership(anonymous, "news", "delete", article(42))
        self.assertEqual(decision.denial_reason, IDENTITY_UNRESOLVED)
        self.assertEqual(self.store.identity_reads, [])

    def test_null_resource_owner_is_not_owned(self):
        decision = self.service.check_with_ownership(self.specialist, "articles", "delete", article(500))
        self.assertEqual(decision.denial_reason, NOT_OWNER)

    def test_full_permission_skips_ownership_read(self):
        admin = identity(Role.ADMIN, " Admin@Example.com ")
        decision = self.service.check_with_ownership(admin, "articles", "delete", article(99))
        self.assertEqual(decision, AuthorizationDecision(authorized=True, owner_id=1))
        self.assertEqual(self.store.identity_reads, ["admin@example.com"])
        self.assertEqual(self.store.ownership_reads, [])

    def test_full_permission_with_unresolved_identity_is_still_authorized(self):
        manager = identity(Role.CONTENT_MANAGER, "ghost@example.com")
        decision = self.service.check_with_ownership(manager, "articles", "update", article(99))
        self.assertEqual(decision, AuthorizationDecision(authorized=True, owner_id=None))

    def test_decision_is_idempotent(self):
        first = self.service.check_with_ownership(self.specialist, "articles", "update", article(99))
        second = self.service.check_with_ownership(self.specialist, "articles", "update", article(99))
        self.assertEqual(first, second)

    def test_unpublish_rights_do_not_depend_on_publish_permission(self):
        engine = AuthorizationEngine()
        self.assertEqual(engine.decide(Role.CONTENT_SPECIALIST, "articles", "publish"), PermissionValue.DENY)
        decision = self.service.check_with_ownership(self.specialist, "articles", "update", article(42))
        self.assertTrue(decision.authorized)


class PublishGovernorTests(SimpleTestCase):
    def setUp(self):
        self.governor = PublishGovernor()

    def test_specialist_publish_is_downgraded(self):
        self.assertEqual(
            self.governor.resolve_status("content_specialist", "articles", "published"), ContentStatus.DRAFT
        )

    def test_admin_and_manager_may_publish(self):
        self.assertEqual(self.governor.resolve_status("admin", "articles", "published"), "published")
        self.assertEqual(self.governor.resolve_status("content_manager", "news", "published"), "published")

    def test_draft_is_returned_unchanged_for_every_role(self):
        for role in list(Role) + ["bogus", None]:
            with self.subTest(role=role):
                self.assertEqual(self.governor.resolve_status(role, "articles", "draft"), "draft")

    def test_other_values_pass_through(self):
        self.assertEqual(self.governor.resolve_status("viewer", "articles", "archived"), "archived")
        self.assertIsNone(self.governor.resolve_status("viewer", "articles", None))

    def test_resources_without_publish_never_publish(self):
        self.assertEqual(self.governor.resolve_status("admin", "sections", "published"), "draft")
        self.assertEqual(self.governor.resolve_status("bogus", "articles", "published"), "draft")
