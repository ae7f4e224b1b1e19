# platebot/services/session_machine.py
"""
Conversation state machine — one inbound Telegram message per call.

START
  Waits for the user to share their own contact. The phone number must be on
  the users allow-list; then the chat moves to AWAITING_REQUESTS for good.

AWAITING_REQUESTS
  "/..."          → admin commands (allow-list management), admins only
  short text      → plate lookup
  long text       → record submission in the record_codec layout, admins only

Admin rights are re-checked against the store on every admin action.
Store and Bot API failures propagate to the caller; the session is saved only
after the membership check that justifies the transition has succeeded.
"""

from platebot.config import settings
from platebot.schemas.session import DialogueState, Session
from platebot.schemas.telegram import Contact, Message
from platebot.services.access_gate import (
    AllowList, add_member, digits_only, is_member, remove_member,
)
from platebot.services.kv_store import KeyValueStore
from platebot.services.plate_normalizer import normalize_plate
from platebot.services.record_codec import RecordParseError, parse_record, render_record
from platebot.services.record_store import lookup_record, save_record
from platebot.services.session_store import chat_lock, load_session, save_session
from platebot.services.telegram_client import (
    TelegramClient, remove_keyboard, request_contact_keyboard,
)
from platebot.utils.logger import get_logger

logger = get_logger(__name__)

COMMAND_PREFIX = "/"

# ── Replies ──────────────────────────────────────────────────────────────────
USAGE_HINT = (
    "Просто надсилайте текстове повідомлення з номерними знаками "
    "і бот відповість чи є такий запис в базі."
)
MSG_PRESS_CONFIRM = "Натисніть \"Підтвердити мій номер телефону\" щоб продовжити."
MSG_SEND_OWN_CONTACT = "Відправте свій контакт."
MSG_NOT_ALLOWED = (
    "Нажаль вашого номеру телефона ще нема в списку дозволених. "
    "Зверніться до адміністратора, та відправте свій контакт знов."
)
MSG_VERIFIED = "Ваш номер {phone} підтверджено. " + USAGE_HINT
MSG_EXACT_MATCH = "Є точний збіг!\n\n{rendered}"
MSG_NOT_FOUND = "Інформації за номерними знаками \"{plate}\" не знайдено. " + USAGE_HINT
MSG_RECORD_SAVED = "Інформацію про авто з номерними знаками \"{plate}\" додано"
MSG_RECORD_UNPARSEABLE = (
    "Не вдалось розібрати запит на додавання інформації про авто. "
    "Перевірте форму (зайві пусті строки тощо не можуть бути оброблені автоматично)"
)

# prefix → (allow-list mutation, allow-list, confirmation)
ADMIN_COMMANDS = {
    "/adduser ":  (add_member,    AllowList.USERS,  "Користувача з номером телефону {phone} додано."),
    "/deluser ":  (remove_member, AllowList.USERS,  "Користувача з номером телефону {phone} видалено."),
    "/addadmin ": (add_member,    AllowList.ADMINS, "Адміна з номером телефону {phone} додано."),
    "/deladmin ": (remove_member, AllowList.ADMINS, "Адміна з номером телефону {phone} видалено."),
}


async def handle_message(message: Message, store: KeyValueStore, bot: TelegramClient):
    """Entry point for every inbound message, from the webhook or the poller."""
    chat_id = message.chat.id
    async with chat_lock(chat_id):
        session = await load_session(store, chat_id)
        logger.info(
            f"📥 chat={chat_id} state={session.state.value} "
            f"kind={'contact' if message.contact else 'text' if message.text else 'other'}"
        )
        if session.state == DialogueState.START:
            await handle_start(message, store, bot)
        else:
            await handle_awaiting_requests(message, session.contact, store, bot)


async def handle_start(message: Message, store: KeyValueStore, bot: TelegramClient):
    chat_id = message.chat.id
    if not message.chat.is_private:
        return

    contact = message.contact
    if contact is None:
        await bot.send_message(chat_id, MSG_PRESS_CONFIRM, reply_markup=request_contact_keyboard())
        return

    # Only the sender's own number can be verified
    if contact.user_id != chat_id:
        logger.warning(f"[AUTH] chat={chat_id} shared someone else's contact (user_id={contact.user_id})")
        await bot.send_message(chat_id, MSG_SEND_OWN_CONTACT, reply_markup=request_contact_keyboard())
        return

    if not await is_member(store, AllowList.USERS, contact.phone_number):
        logger.warning(f"[AUTH] chat={chat_id} phone={contact.phone_number} not on the allow-list")
        await bot.send_message(chat_id, MSG_NOT_ALLOWED, reply_markup=request_contact_keyboard())
        return

    await save_session(store, chat_id, Session.awaiting_requests(contact))
    await bot.send_message(
        chat_id, MSG_VERIFIED.format(phone=contact.phone_number), reply_markup=remove_keyboard()
    )


async def handle_awaiting_requests(message: Message, contact: Contact, store: KeyValueStore,
                                   bot: TelegramClient):
    chat_id = message.chat.id
    text = message.text
    if text is None:
        await bot.send_message(chat_id, USAGE_HINT)
        return

    if text.startswith(COMMAND_PREFIX):
        # Not an admin or not a known command: the turn ends without a reply
        await handle_admin_command(message, contact, store, bot)
        return

    if len(text) < settings.PLATE_QUERY_MAX_LENGTH:
        await handle_plate_query(message, store, bot)
    else:
        await handle_record_submission(message, contact, store, bot)


async def handle_admin_command(message: Message, contact: Contact, store: KeyValueStore,
                               bot: TelegramClient):
    if not await is_member(store, AllowList.ADMINS, contact.phone_number):
        command = message.text.split(" ", 1)[0]
        logger.warning(f"[AUTH] Non-admin {contact.phone_number} sent command {command!r}")
        return

    text = message.text
    for prefix, (action, allow_list, confirmation) in ADMIN_COMMANDS.items():
        if text.startswith(prefix):
            phone = digits_only(text[len(prefix):].strip())
            await action(store, allow_list, phone)
            await bot.send_message(message.chat.id, confirmation.format(phone=phone))
            return

    logger.info(f"Unrecognised command from admin {contact.phone_number}: {text!r}")


async def handle_plate_query(message: Message, store: KeyValueStore, bot: TelegramClient):
    raw = message.text
    plate = normalize_plate(raw)
    logger.info(f"🔍 Searching for \"{plate}\" (raw: \"{raw}\")")

    record = await lookup_record(store, plate)
    if record is None:
        await bot.send_message(message.chat.id, MSG_NOT_FOUND.format(plate=plate))
        return
    await bot.send_message(
        message.chat.id, MSG_EXACT_MATCH.format(rendered=render_record(record, plate))
    )


async def handle_record_submission(message: Message, contact: Contact, store: KeyValueStore,
                                   bot: TelegramClient):
    chat_id = message.chat.id
    if not await is_member(store, AllowList.ADMINS, contact.phone_number):
        await bot.send_message(chat_id, USAGE_HINT)
        return

    try:
        plate, record = parse_record(message.text)
    except RecordParseError:
        logger.info(f"Unparseable record submission from admin {contact.phone_number}")
        await bot.send_message(chat_id, MSG_RECORD_UNPARSEABLE)
        return

    await save_record(store, plate, record)
    logger.info(f"💾 Record saved for CAR:{plate} by admin {contact.phone_number}")
    await bot.send_message(
        chat_id, MSG_RECORD_SAVED.format(plate=plate), reply_to_message_id=message.message_id
    )
