"""Unit tests for the phone-number allow-list."""

import pytest
from platebot.services.access_gate import (
    AllowList, add_member, digits_only, is_member, member_key, remove_member,
)


class TestDigitsOnly:
    def test_formatting_removed(self):
        assert digits_only("+380 (67) 123-45-67") == "380671234567"

    def test_no_digits(self):
        assert digits_only("abc") == ""


class TestAllowList:
    def test_keys(self):
        assert member_key(AllowList.USERS, "+380 67 123 4567") == "USER:380671234567"
        assert member_key(AllowList.ADMINS, "380671234567") == "ADMIN:380671234567"

    @pytest.mark.asyncio
    async def test_membership_ignores_formatting(self, store):
        await add_member(store, AllowList.USERS, "+380 67 123 4567")
        assert await is_member(store, AllowList.USERS, "380671234567")
        assert await store.exists("USER:380671234567")

    @pytest.mark.asyncio
    async def test_lists_are_separate(self, store):
        await add_member(store, AllowList.USERS, "380671234567")
        assert not await is_member(store, AllowList.ADMINS, "380671234567")

    @pytest.mark.asyncio
    async def test_remove(self, store):
        await add_member(store, AllowList.ADMINS, "380991112233")
        await remove_member(store, AllowList.ADMINS, "+380 99 111 22 33")
        assert not await is_member(store, AllowList.ADMINS, "380991112233")
