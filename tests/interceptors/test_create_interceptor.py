# tests/interceptors/test_create_interceptor.py
"""Tests for the entity-keyed create pipeline."""

from dataclasses import asdict

import httpx
import pytest
from conftest import CONTRACT, generate_identity, sign_nonce, token_node

from myriad_api.core.errors import (
    COMMENT_FIRST_MESSAGE,
    ConflictRejection,
    NotFoundError,
    ValidationRejection,
    VerificationFailure,
)
from myriad_api.enums import (
    ActivityLogType,
    EntityKind,
    MethodType,
    NotificationType,
    SectionType,
)
from myriad_api.interceptors.context import (
    ExperiencePostArgs,
    InvocationContext,
    NetworkCurrencyArgs,
    PostArgs,
    TagArgs,
    TransactionArgs,
    UserReportArgs,
    VoteArgs,
    WalletLinkArgs,
)
from myriad_api.interceptors.create import CreateInterceptor
from myriad_api.models import (
    ActivityLog,
    Experience,
    ExperiencePost,
    Notification,
    Post,
    Tag,
    Transaction,
    User,
    UserCurrency,
    Vote,
    Wallet,
)
from myriad_api.repositories import (
    CurrencyRepository,
    ExperiencePostRepository,
    PostRepository,
    TagRepository,
    TransactionRepository,
    VoteRepository,
    WalletRepository,
)
from myriad_api.services.container import ServiceContainer
from myriad_api.services.network import NetworkService
from myriad_api.services.notification import NotificationService


def _interceptor(db_session, fanout, transport=None) -> CreateInterceptor:
    return CreateInterceptor(db_session, fanout, ServiceContainer(db_session, rpc_transport=transport))


def _create_with(repository_cls, db_session):
    async def create(ctx):
        return repository_cls(db_session).create(**asdict(ctx.args))

    return create


def _upsert_vote(db_session):
    async def upsert(ctx):
        return VoteRepository(db_session).upsert(**asdict(ctx.args))

    return upsert


class TestDispatch:
    def test_rule_table_covers_every_mutating_kind(self):
        assert set(CreateInterceptor.RULES) == set(EntityKind) - {
            EntityKind.EXPERIENCE,
            EntityKind.USER,
        }

    @pytest.mark.asyncio
    async def test_unmatched_kind_passes_through(self, db_session, fanout, test_user):
        async def create(ctx):
            return Experience(name=ctx.args, created_by=test_user.id)

        ctx = InvocationContext(EntityKind.EXPERIENCE, MethodType.CREATE, "travel")
        result = await _interceptor(db_session, fanout).intercept(ctx, create)

        assert result.name == "travel"
        assert fanout.pending == 0


class TestTransactionRules:
    @pytest.mark.asyncio
    async def test_sender_and_recipient_must_differ(self, db_session, fanout, test_user, currency):
        args = TransactionArgs(
            from_=test_user.id, to=test_user.id, hash="0x1", amount=1.0, currency_id=currency.id
        )
        ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)

        with pytest.raises(ValidationRejection, match="From and to address cannot be the same!"):
            await _interceptor(db_session, fanout).intercept(
                ctx, _create_with(TransactionRepository, db_session)
            )

        assert db_session.query(Transaction).count() == 0

    @pytest.mark.asyncio
    async def test_content_tips_need_reference(
        self, db_session, fanout, test_user, other_user, currency
    ):
        args = TransactionArgs(
            from_=test_user.id,
            to=other_user.id,
            hash="0x1",
            amount=1.0,
            currency_id=currency.id,
            type="post",
        )
        ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)

        with pytest.raises(ValidationRejection, match="Please insert referenceId"):
            await _interceptor(db_session, fanout).intercept(
                ctx, _create_with(TransactionRepository, db_session)
            )

    @pytest.mark.asyncio
    async def test_currency_must_exist(self, db_session, fanout, test_user, other_user):
        args = TransactionArgs(
            from_=test_user.id, to=other_user.id, hash="0x1", amount=1.0, currency_id="nope"
        )
        ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)

        with pytest.raises(NotFoundError):
            await _interceptor(db_session, fanout).intercept(
                ctx, _create_with(TransactionRepository, db_session)
            )

    @pytest.mark.asyncio
    async def test_tip_fans_out_notifications_metric_and_log(
        self, db_session, fanout, test_user, other_user, currency, test_post
    ):
        args = TransactionArgs(
            from_=test_user.id,
            to=other_user.id,
            hash="0x1",
            amount=2.5,
            currency_id=currency.id,
            type="post",
            reference_id=test_post.id,
        )
        ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)

        transaction = await _interceptor(db_session, fanout).intercept(
            ctx, _create_with(TransactionRepository, db_session)
        )
        await fanout.drain()

        types = {row.type for row in db_session.query(Notification).all()}
        assert types == {NotificationType.TIPS_SENT.value, NotificationType.TIPS_RECEIVED.value}
        assert test_post.metric["tips"] == 1
        log = db_session.query(ActivityLog).one()
        assert (log.type, log.user_id, log.reference_id) == (
            ActivityLogType.SENDTIP.value,
            test_user.id,
            transaction.id,
        )


class TestVoteRules:
    @pytest.mark.asyncio
    async def test_post_downvote_needs_debate_comment(
        self, db_session, fanout, test_user, test_post
    ):
        args = VoteArgs(user_id=test_user.id, type="post", reference_id=test_post.id, state=False)
        ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)

        with pytest.raises(ValidationRejection) as exc_info:
            await _interceptor(db_session, fanout).intercept(ctx, _upsert_vote(db_session))

        assert exc_info.value.message == COMMENT_FIRST_MESSAGE
        assert db_session.query(Vote).count() == 0

    @pytest.mark.asyncio
    async def test_post_downvote_after_debate_comment(
        self, db_session, fanout, test_user, other_user, test_post, make_comment
    ):
        make_comment(test_user, test_post, section=SectionType.DEBATE.value)
        args = VoteArgs(
            user_id=test_user.id,
            type="post",
            reference_id=test_post.id,
            state=False,
            section="debate",
        )
        ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)

        result = await _interceptor(db_session, fanout).intercept(ctx, _upsert_vote(db_session))
        await fanout.drain()

        assert "_id" not in result
        assert result["to_user_id"] == other_user.id
        # Section is dropped for post votes.
        assert result["section"] is None
        assert test_post.metric["downvotes"] == 1
        assert db_session.get(User, other_user.id).metric["total_kudos"] == 0
        assert db_session.query(ActivityLog).filter_by(type="givevote").count() == 1

    @pytest.mark.asyncio
    async def test_voting_again_replaces_state(self, db_session, fanout, test_user, test_post):
        interceptor = _interceptor(db_session, fanout)
        for state in (True, True):
            args = VoteArgs(user_id=test_user.id, type="post", reference_id=test_post.id, state=state)
            await interceptor.intercept(
                InvocationContext(EntityKind.VOTE, MethodType.CREATE, args),
                _upsert_vote(db_session),
            )
        await fanout.drain()

        assert db_session.query(Vote).count() == 1
        assert test_post.metric["upvotes"] == 1
        assert test_post.popular_count == 1

    @pytest.mark.asyncio
    async def test_comment_vote_needs_section(
        self, db_session, fanout, test_user, test_post, make_comment
    ):
        comment = make_comment(test_user, test_post)
        args = VoteArgs(user_id=test_user.id, type="comment", reference_id=comment.id, state=True)
        ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)

        with pytest.raises(ValidationRejection, match="Section cannot empty"):
            await _interceptor(db_session, fanout).intercept(ctx, _upsert_vote(db_session))

    @pytest.mark.asyncio
    async def test_unknown_vote_type(self, db_session, fanout, test_user):
        args = VoteArgs(user_id=test_user.id, type="user", reference_id="x", state=True)
        ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)

        with pytest.raises(ValidationRejection, match="Type not found"):
            await _interceptor(db_session, fanout).intercept(ctx, _upsert_vote(db_session))


class TestTagRules:
    @pytest.mark.asyncio
    async def test_id_is_normalized_before_create(self, db_session, fanout):
        async def create(ctx):
            return TagRepository(db_session).create(id=ctx.args.id, count=1)

        ctx = InvocationContext(EntityKind.TAG, MethodType.CREATE, TagArgs(id="  Myriad-Town hall"))
        tag = await _interceptor(db_session, fanout).intercept(ctx, create)

        assert tag.id == "myriadtown"

    @pytest.mark.asyncio
    async def test_colliding_tag_rejected(self, db_session, fanout):
        db_session.add(Tag(id="myriad", count=1))
        db_session.commit()

        async def create(ctx):
            raise AssertionError("primary write must not run")

        ctx = InvocationContext(EntityKind.TAG, MethodType.CREATE, TagArgs(id="MYRIAD"))
        with pytest.raises(ConflictRejection, match="Tag already exist"):
            await _interceptor(db_session, fanout).intercept(ctx, create)

    @pytest.mark.asyncio
    async def test_mixed_case_stored_tag_rejected(self, db_session, fanout):
        db_session.add(Tag(id="Myriad", count=1))
        db_session.commit()

        async def create(ctx):
            raise AssertionError("primary write must not run")

        ctx = InvocationContext(EntityKind.TAG, MethodType.CREATE, TagArgs(id="Myriad"))
        with pytest.raises(ConflictRejection, match="Tag already exist"):
            await _interceptor(db_session, fanout).intercept(ctx, create)


class TestPostRules:
    @pytest.mark.asyncio
    async def test_published_post_fans_out(self, db_session, fanout, test_user, other_user):
        args = PostArgs(
            created_by=test_user.id,
            text="gm #Crypto",
            tags=["Art"],
            mentions=[other_user.id],
        )
        ctx = InvocationContext(EntityKind.POST, MethodType.CREATE, args)

        post = await _interceptor(db_session, fanout).intercept(
            ctx, _create_with(PostRepository, db_session)
        )
        await fanout.drain()

        assert post.published_at is not None
        assert post.tags == ["art", "crypto"]
        assert {tag.id for tag in db_session.query(Tag).all()} == {"art", "crypto"}
        mention = db_session.query(Notification).filter_by(to_user_id=other_user.id).one()
        assert mention.type == NotificationType.POST_MENTION.value
        assert db_session.get(User, test_user.id).metric["total_posts"] == 1

    @pytest.mark.asyncio
    async def test_draft_post_has_no_side_effects(self, db_session, fanout, test_user):
        args = PostArgs(created_by=test_user.id, text="later", status="draft", tags=["art"])
        ctx = InvocationContext(EntityKind.POST, MethodType.CREATE, args)

        post = await _interceptor(db_session, fanout).intercept(
            ctx, _create_with(PostRepository, db_session)
        )

        assert post.published_at is None
        assert fanout.pending == 0


class TestExperiencePostRules:
    @pytest.mark.asyncio
    async def test_index_is_merged_onto_post(self, db_session, fanout, test_user, test_post):
        experience = Experience(name="news", created_by=test_user.id)
        db_session.add(experience)
        db_session.commit()
        test_post.experience_index = {"older": 1}
        db_session.commit()

        async def create(ctx):
            return ExperiencePostRepository(db_session).create(
                experience_id=ctx.args.experience_id, post_id=ctx.args.post_id
            )

        args = ExperiencePostArgs(experience_id=experience.id, post_id=test_post.id)
        interceptor = _interceptor(db_session, fanout)
        await interceptor.intercept(
            InvocationContext(EntityKind.EXPERIENCE_POST, MethodType.CREATE, args), create
        )

        assert db_session.get(Post, test_post.id).experience_index == {
            "older": 1,
            experience.id: 1,
        }

        again = ExperiencePostArgs(experience_id=experience.id, post_id=test_post.id)
        with pytest.raises(ConflictRejection, match="Already added to experience"):
            await interceptor.intercept(
                InvocationContext(EntityKind.EXPERIENCE_POST, MethodType.CREATE, again), create
            )
        assert db_session.query(ExperiencePost).count() == 1


class TestWalletRules:
    def _args(self, user, identity, network_id="myriad", wallet_id=None, **overrides):
        values = {
            "user_id": user.id,
            "nonce": user.nonce,
            "signature": sign_nonce(identity["signing_key"], user.nonce),
            "public_address": identity["public_key_hex"],
            "wallet_type": "polkadot",
            "network_type": network_id,
            "data": {"id": wallet_id or identity["public_key_hex"]},
        }
        values.update(overrides)
        return WalletLinkArgs(**values)

    async def _link(self, db_session, fanout, args):
        async def create(ctx):
            return WalletRepository(db_session).create(**ctx.args.wallet)

        ctx = InvocationContext(EntityKind.USER_WALLET, MethodType.CREATE, args)
        return await _interceptor(db_session, fanout).intercept(ctx, create)

    @pytest.mark.asyncio
    async def test_linking_rotates_nonce_and_fans_out(
        self, db_session, fanout, test_user, currency
    ):
        identity = generate_identity()
        old_nonce = test_user.nonce

        wallet = await self._link(db_session, fanout, self._args(test_user, identity))
        await fanout.drain()

        assert wallet.id == identity["public_key_hex"]
        assert db_session.get(Wallet, identity["public_key_hex"]).primary is True
        assert db_session.get(User, test_user.id).nonce != old_nonce
        owned = db_session.query(UserCurrency).filter_by(user_id=test_user.id).one()
        assert owned.currency_id == currency.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"data": None}, "Data cannot be empty"),
            ({"network_type": "unknown"}, "Network not exists"),
            ({"data": {"name": "no id"}}, "Id must included"),
            ({"signature": "00" * 64}, "Failed to verify"),
        ],
    )
    async def test_invalid_links_are_rejected(
        self, db_session, fanout, test_user, network, overrides, message
    ):
        args = self._args(test_user, generate_identity(), **overrides)

        with pytest.raises((ValidationRejection, VerificationFailure), match=message):
            await self._link(db_session, fanout, args)
        assert db_session.query(Wallet).count() == 0

    @pytest.mark.asyncio
    async def test_wallet_id_must_be_the_signing_key(
        self, db_session, fanout, test_user, network
    ):
        signer = generate_identity()
        victim = generate_identity()
        args = self._args(test_user, signer, wallet_id=victim["public_key_hex"])

        with pytest.raises(VerificationFailure, match="Failed to verify"):
            await self._link(db_session, fanout, args)
        assert db_session.get(Wallet, victim["public_key_hex"]) is None

    @pytest.mark.asyncio
    async def test_stale_nonce_is_rejected(self, db_session, fanout, test_user, network):
        identity = generate_identity()
        stale = test_user.nonce + 1
        args = self._args(
            test_user,
            identity,
            nonce=stale,
            signature=sign_nonce(identity["signing_key"], stale),
        )

        with pytest.raises(VerificationFailure, match="Failed to verify"):
            await self._link(db_session, fanout, args)
        assert db_session.query(Wallet).count() == 0

    @pytest.mark.asyncio
    async def test_wallet_ids_and_types_are_unique(
        self, db_session, fanout, test_user, other_user, network
    ):
        identity = generate_identity()
        await self._link(db_session, fanout, self._args(test_user, identity))

        with pytest.raises(ConflictRejection, match="Wallet Id already exist"):
            await self._link(db_session, fanout, self._args(other_user, identity))

        test_user = db_session.get(User, test_user.id)
        with pytest.raises(ConflictRejection, match="Wallet already connected"):
            await self._link(db_session, fanout, self._args(test_user, generate_identity()))
        await fanout.drain()


class TestNetworkCurrencyRules:
    @pytest.mark.asyncio
    async def test_verified_currency_is_created(self, db_session, fanout, network):
        async def create(ctx):
            return CurrencyRepository(db_session).create(**ctx.args.currency)

        args = NetworkCurrencyArgs(network_id=network.id, reference_id=CONTRACT)
        ctx = InvocationContext(EntityKind.NETWORK_CURRENCY, MethodType.CREATE, args)
        interceptor = _interceptor(db_session, fanout, httpx.MockTransport(token_node()))

        currency = await interceptor.intercept(ctx, create)

        assert (currency.symbol, currency.decimal, currency.native) == ("USDT", 6, False)
        with pytest.raises(ConflictRejection):
            await interceptor.intercept(
                InvocationContext(
                    EntityKind.NETWORK_CURRENCY,
                    MethodType.CREATE,
                    NetworkCurrencyArgs(network_id=network.id, reference_id=CONTRACT),
                ),
                create,
            )


class TestUserReportRules:
    @pytest.mark.asyncio
    async def test_reports_are_counted_once_per_reporter(
        self, db_session, fanout, test_user, other_user, test_post
    ):
        container = ServiceContainer(db_session)

        async def open_report(ctx):
            return container.reports.open_report(ctx.args.reference_type, ctx.args.reference_id)

        def ctx_for(user):
            args = UserReportArgs(
                reported_by=user.id, reference_type="post", reference_id=test_post.id
            )
            return InvocationContext(EntityKind.USER_REPORT, MethodType.CREATE, args)

        interceptor = _interceptor(db_session, fanout)
        await interceptor.intercept(ctx_for(test_user), open_report)
        report = await interceptor.intercept(ctx_for(other_user), open_report)

        assert report.total_reported == 2
        with pytest.raises(ConflictRejection, match="You have report this post"):
            await interceptor.intercept(ctx_for(test_user), open_report)


class TestFanOut:
    @pytest.mark.asyncio
    async def test_failed_side_effect_does_not_fail_the_write(
        self, db_session, fanout, mocker, test_user, other_user, currency
    ):
        mocker.patch.object(
            NotificationService, "send_tips_success", side_effect=RuntimeError("smtp down")
        )
        args = TransactionArgs(
            from_=test_user.id, to=other_user.id, hash="0x2", amount=1.0, currency_id=currency.id
        )
        ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)

        transaction = await _interceptor(db_session, fanout).intercept(
            ctx, _create_with(TransactionRepository, db_session)
        )
        await fanout.drain()

        assert db_session.get(Transaction, transaction.id) is not None
        assert fanout.failures == 1
        assert db_session.query(ActivityLog).count() == 1

    @pytest.mark.asyncio
    async def test_existing_currency_skips_contract_lookup(
        self, db_session, fanout, mocker, network
    ):
        verify = mocker.patch.object(NetworkService, "verify_contract_address")
        CurrencyRepository(db_session).create(
            symbol="USDT", name="Tether", decimal=6, network_id=network.id, reference_id=CONTRACT
        )
        db_session.commit()

        args = NetworkCurrencyArgs(network_id=network.id, reference_id=CONTRACT)
        ctx = InvocationContext(EntityKind.NETWORK_CURRENCY, MethodType.CREATE, args)
        with pytest.raises(ConflictRejection, match="Currency already exist"):
            await _interceptor(db_session, fanout).intercept(
                ctx, _create_with(CurrencyRepository, db_session)
            )

        verify.assert_not_called()
