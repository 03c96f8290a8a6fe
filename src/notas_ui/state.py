"""
Reflex state management for the Notas Fiscais dashboard.

The states here are thin: list logic, supersession and debouncing live in
the per-session controllers (`notas_ui.controllers`), and each state copies
the controller's current page into Reflex vars after every action.

- AuthState: session cookies, sign-in/out and the page guard
- NotasState / HistoricoState: the two invoice views (shared mixin)
- ConfiguracoesState: profile card and team members
- PasswordState: reset and invite-completion flows
"""

import asyncio

import reflex as rx

from notas_ui.controllers import (
    InvoiceListController,
    InvoiceView,
    MembersController,
    PasswordController,
    controller_for,
    drop_session,
    parse_link_fragment,
)
from notas_ui.lib import logs
from notas_ui.models.common import Feedback
from notas_ui.models.invoice import InvoiceStatus, ReprocessRequest
from notas_ui.models.member import MemberRecord, MemberRole
from notas_ui.models.reflex_models import (
    ConfigDocOption,
    CounterChip,
    InvoiceRow,
    MemberRow,
    PageButton,
    ProjectAccountOption,
    config_doc_option,
    counter_chips,
    invoice_row,
    member_row,
    page_buttons,
)
from notas_ui.services import AuthError, get_services

LOG = logs.logger(__file__)

APP_TITLE = "Notas Fiscais"


def _toast(feedback: Feedback):
    if feedback.ok:
        return rx.toast.success(feedback.message)
    return rx.toast.error(feedback.message)


async def _resolve_user(token: str) -> MemberRecord | None:
    if not token:
        return None
    try:
        return await get_services().auth.get_user(token)
    except AuthError as exc:
        LOG.warning("Session check failed: %s", exc.message)
        return None


def _int_or_none(value: str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class AuthState(rx.State):
    """Signed-in user, held as cookies so a reload keeps the session."""

    access_token: str = rx.Cookie("", name="notas_ui_access_token", same_site="lax")
    refresh_token: str = rx.Cookie("", name="notas_ui_refresh_token", same_site="lax")

    user_id: str = ""
    user_email: str = ""
    user_name: str = ""
    user_role: str = "user"

    login_email: str = ""
    login_password: str = ""
    login_error: str = ""
    login_loading: bool = False

    @rx.var
    def is_authenticated(self) -> bool:
        return self.user_id != ""

    @rx.var
    def is_admin(self) -> bool:
        return self.user_role == MemberRole.ADMIN.value

    @rx.var
    def role_label(self) -> str:
        return MemberRole.normalize(self.user_role).label

    @rx.var
    def user_initial(self) -> str:
        name = self.user_name or self.user_email
        return name[:1].upper() if name else "?"

    def current_member(self) -> MemberRecord | None:
        if not self.user_id:
            return None
        return MemberRecord(
            id=self.user_id,
            email=self.user_email,
            display_name=self.user_name,
            role=MemberRole.normalize(self.user_role),
        )

    def _session_id(self) -> str:
        return self.router.session.client_token

    def _apply_user(self, user: MemberRecord) -> None:
        self.user_id = user.id
        self.user_email = user.email
        self.user_name = user.display_name
        self.user_role = user.role.value

    def _store_session(self, access_token: str, refresh_token: str, user: MemberRecord) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._apply_user(user)

    def _clear_session(self) -> None:
        drop_session(self._session_id())
        self.access_token = ""
        self.refresh_token = ""
        self.user_id = ""
        self.user_email = ""
        self.user_name = ""
        self.user_role = MemberRole.USER.value

    @rx.event
    def set_login_email(self, value: str):
        self.login_email = value

    @rx.event
    def set_login_password(self, value: str):
        self.login_password = value

    @rx.event
    async def sign_in(self):
        self.login_error = ""
        email = self.login_email.strip()
        if not email or not self.login_password:
            self.login_error = "Informe email e senha"
            return
        self.login_loading = True
        yield
        try:
            session = await get_services().auth.sign_in(email, self.login_password)
        except AuthError as exc:
            self.login_error = exc.message
            self.login_loading = False
            return
        LOG.info("sign_in - user:%s", session.user.id)
        self._store_session(session.access_token, session.refresh_token, session.user)
        self.login_password = ""
        self.login_loading = False
        yield rx.redirect("/notas")

    @rx.event
    async def sign_out(self):
        token = self.access_token
        self._clear_session()
        if token:
            try:
                await get_services().auth.sign_out(token)
            except AuthError as exc:
                LOG.warning("Sign-out failed: %s", exc.message)
        return rx.redirect("/")

    @rx.event
    async def require_session(self):
        """Page guard: resolve the cookie's user or send the visitor to sign-in."""
        user = await _resolve_user(self.access_token)
        if user is None:
            self._clear_session()
            return rx.redirect("/")
        self._apply_user(user)

    @rx.event
    async def redirect_if_signed_in(self):
        user = await _resolve_user(self.access_token)
        if user is not None:
            self._apply_user(user)
            return rx.redirect("/notas")


class InvoiceListMixin(rx.State, mixin=True):
    """Vars and events shared by the pending and history views."""

    rows: list[InvoiceRow] = []
    total_items: int = 0
    total_pages: int = 1
    current_page: int = 1
    first_index: int = 0
    last_index: int = 0
    pages: list[PageButton] = []
    has_previous: bool = False
    has_next: bool = False

    loading: bool = True
    error: str = ""
    empty_message: str = ""

    search_input: str = ""
    status_filter: str = ""
    start_date: str = ""
    end_date: str = ""
    sort_field: str = ""
    sort_direction: str = "asc"
    has_filters: bool = False

    @rx.var
    def is_empty(self) -> bool:
        return not self.loading and self.error == "" and self.total_items == 0

    @rx.var
    def range_summary(self) -> str:
        if self.total_items == 0:
            return ""
        return f"Mostrando {self.first_index}-{self.last_index} de {self.total_items}"

    def _view(self) -> InvoiceView:
        return InvoiceView.PENDING

    def _controller(self) -> InvoiceListController:
        view = self._view()

        def _factory() -> InvoiceListController:
            services = get_services()
            page_size = (
                services.settings.history_page_size
                if view is InvoiceView.HISTORY
                else services.settings.invoices_page_size
            )
            return InvoiceListController(
                services.invoices,
                view=view,
                page_size=page_size,
                debounce_delay=services.settings.search_debounce,
            )

        return controller_for(self.router.session.client_token, view.value, _factory)

    def _sync(self, controller: InvoiceListController) -> None:
        page = controller.page
        query = controller.query
        self.rows = [invoice_row(r, controller.reprocessing) for r in page.items]
        self.total_items = page.total_items
        self.total_pages = page.total_pages
        self.current_page = page.effective_page
        self.first_index = page.first_index
        self.last_index = page.last_index
        self.pages = page_buttons(page)
        self.has_previous = page.has_previous
        self.has_next = page.has_next
        self.loading = controller.loading
        self.error = controller.error or ""
        self.empty_message = controller.empty_message
        self.status_filter = query.status.value if query.status else ""
        self.start_date = query.start_date or ""
        self.end_date = query.end_date or ""
        self.sort_field = query.sort_field or ""
        self.sort_direction = query.sort_direction.value
        self.has_filters = query.has_filters

    @rx.event(background=True)
    async def load_page(self):
        async with self:
            if not self.user_id:
                return
            token = self.access_token
            controller = self._controller()
            self.loading = True
            self.error = ""
        await controller.load(token)
        async with self:
            self._sync(controller)

    @rx.event(background=True)
    async def search(self, term: str):
        async with self:
            self.search_input = term
            controller = self._controller()
        if await controller.search(term) is None:
            return
        async with self:
            self._sync(controller)

    @rx.event
    def set_start_date(self, value: str):
        controller = self._controller()
        controller.set_date_range(value or None, self.end_date or None)
        self._sync(controller)

    @rx.event
    def set_end_date(self, value: str):
        controller = self._controller()
        controller.set_date_range(self.start_date or None, value or None)
        self._sync(controller)

    @rx.event
    def sort_by(self, field: str):
        controller = self._controller()
        controller.sort_by(field)
        self._sync(controller)

    @rx.event
    def go_to_page(self, page: int):
        controller = self._controller()
        controller.go_to_page(int(page))
        self._sync(controller)

    @rx.event
    def next_page(self):
        controller = self._controller()
        controller.next_page()
        self._sync(controller)

    @rx.event
    def previous_page(self):
        controller = self._controller()
        controller.previous_page()
        self._sync(controller)

    @rx.event
    def clear_filters(self):
        controller = self._controller()
        controller.clear_filters()
        self.search_input = ""
        self._sync(controller)

    @rx.event(background=True)
    async def download_pdf(self, invoice_id: str):
        async with self:
            token = self.access_token
            controller = self._controller()
        result = await controller.download_pdf(invoice_id, token)
        if isinstance(result, Feedback):
            return _toast(result)
        return rx.download(data=result.data, filename=result.filename)


class NotasState(InvoiceListMixin, AuthState):
    """Pending notas: counters, status chips and reprocessing."""

    counters: list[CounterChip] = []
    counters_total: int = 0

    reprocess_open: bool = False
    reprocess_id: str = ""
    reprocess_numero: str = ""
    reprocess_reason: str = ""
    reprocess_process: str = ""
    reprocess_observations: str = ""
    reprocess_loading_docs: bool = False
    reprocess_submitting: bool = False
    config_docs: list[ConfigDocOption] = []
    selected_config_doc: str = ""
    selected_account: str = ""

    @rx.var
    def account_options(self) -> list[ProjectAccountOption]:
        for doc in self.config_docs:
            if doc.code == self.selected_config_doc:
                return doc.accounts
        return []

    @rx.var
    def reprocess_title(self) -> str:
        return f"Reprocessar nota {self.reprocess_numero}"

    def _view(self) -> InvoiceView:
        return InvoiceView.PENDING

    @rx.event(background=True)
    async def load_counters(self):
        async with self:
            if not self.user_id:
                return
            token = self.access_token
            controller = self._controller()
        counters = await controller.load_counters(token)
        async with self:
            self.counters = counter_chips(counters)
            self.counters_total = counters.total

    @rx.event
    def set_status_filter(self, status: str):
        controller = self._controller()
        controller.set_status(InvoiceStatus.parse(status) if status else None)
        self._sync(controller)

    @rx.event(background=True)
    async def open_reprocess(self, invoice_id: str):
        async with self:
            token = self.access_token
            controller = self._controller()
            invoice = controller.find(invoice_id)
            if invoice is None:
                return rx.toast.error("Nota fiscal não encontrada.")
            self.reprocess_open = True
            self.reprocess_id = invoice.id
            self.reprocess_numero = "" if invoice.numero is None else str(invoice.numero)
            self.reprocess_reason = invoice.note or ""
            self.reprocess_process = ""
            self.reprocess_observations = ""
            self.selected_config_doc = ""
            self.selected_account = ""
            self.config_docs = []
            self.reprocess_loading_docs = True
        documents = await controller.config_documents(invoice_id, token)
        async with self:
            if self.reprocess_id != invoice_id:
                return
            self.config_docs = [config_doc_option(d) for d in documents]
            self.reprocess_loading_docs = False

    @rx.event
    def set_reprocess_open(self, value: bool):
        self.reprocess_open = value
        if not value:
            self.reprocess_id = ""

    @rx.event
    def set_reprocess_reason(self, value: str):
        self.reprocess_reason = value

    @rx.event
    def set_reprocess_process(self, value: str):
        self.reprocess_process = value

    @rx.event
    def set_reprocess_observations(self, value: str):
        self.reprocess_observations = value

    @rx.event
    def set_selected_config_doc(self, value: str):
        self.selected_config_doc = value
        self.selected_account = ""

    @rx.event
    def set_selected_account(self, value: str):
        self.selected_account = value

    @rx.event(background=True)
    async def submit_reprocess(self):
        async with self:
            token = self.access_token
            controller = self._controller()
            invoice_id = self.reprocess_id
            doc_name = next(
                (d.label for d in self.config_docs if d.code == self.selected_config_doc),
                "",
            )
            request = ReprocessRequest(
                reason=self.reprocess_reason,
                process=self.reprocess_process.strip(),
                observations=self.reprocess_observations.strip() or None,
                config_doc_code=_int_or_none(self.selected_config_doc),
                project_account_code=_int_or_none(self.selected_account),
                config_doc_name=doc_name,
            )
            self.reprocess_submitting = True
        task = asyncio.create_task(controller.reprocess(invoice_id, request, token))
        await asyncio.sleep(0)
        async with self:
            self._sync(controller)
        feedback = await task
        async with self:
            self.reprocess_submitting = False
            if feedback.ok:
                self.reprocess_open = False
                self.reprocess_id = ""
            self.counters = counter_chips(controller.counters)
            self.counters_total = controller.counters.total
            self._sync(controller)
        return _toast(feedback)


class HistoricoState(InvoiceListMixin, AuthState):
    """Processed notas with PDF and XML downloads."""

    def _view(self) -> InvoiceView:
        return InvoiceView.HISTORY

    @rx.event(background=True)
    async def download_xml(self, invoice_id: str):
        async with self:
            token = self.access_token
            controller = self._controller()
        result = await controller.download_xml(invoice_id, token)
        if isinstance(result, Feedback):
            return _toast(result)
        return rx.download(data=result.data, filename=result.filename)


class ConfiguracoesState(AuthState):
    """Profile card and team members table."""

    members: list[MemberRow] = []
    members_total: int = 0
    members_page: int = 1
    members_total_pages: int = 1
    members_pages: list[PageButton] = []
    members_has_previous: bool = False
    members_has_next: bool = False
    members_loading: bool = True
    members_error: str = ""
    members_empty_message: str = ""
    members_search: str = ""
    members_sort_field: str = ""
    members_sort_direction: str = "asc"
    busy: bool = False

    add_open: bool = False
    new_name: str = ""
    new_email: str = ""
    new_role: str = "user"

    edit_open: bool = False
    edit_id: str = ""
    edit_name: str = ""
    edit_role: str = "user"

    delete_open: bool = False
    delete_id: str = ""
    delete_label: str = ""

    profile_name: str = ""

    @rx.var
    def members_is_empty(self) -> bool:
        return not self.members_loading and self.members_error == "" and self.members_total == 0

    def _controller(self) -> MembersController:
        def _factory() -> MembersController:
            services = get_services()
            return MembersController(
                services.members,
                current_user=None,
                origin=services.settings.app_origin,
                page_size=services.settings.members_page_size,
                debounce_delay=services.settings.search_debounce,
            )

        controller = controller_for(self._session_id(), "members", _factory)
        controller.current_user = self.current_member()
        return controller

    def _sync(self, controller: MembersController) -> None:
        page = controller.page
        self.members = [member_row(m, self.user_id) for m in page.items]
        self.members_total = page.total_items
        self.members_page = page.effective_page
        self.members_total_pages = page.total_pages
        self.members_pages = page_buttons(page)
        self.members_has_previous = page.has_previous
        self.members_has_next = page.has_next
        self.members_loading = controller.loading
        self.members_error = controller.error or ""
        self.members_empty_message = controller.empty_message
        self.members_sort_field = controller.query.sort_field or ""
        self.members_sort_direction = controller.query.sort_direction.value
        self.busy = controller.busy
        if controller.current_user is not None:
            self.user_name = controller.current_user.display_name

    @rx.event(background=True)
    async def load_page(self):
        async with self:
            if not self.user_id:
                return
            controller = self._controller()
            self.profile_name = self.user_name
            self.members_loading = True
            self.members_error = ""
        await controller.load()
        async with self:
            self._sync(controller)

    @rx.event(background=True)
    async def search(self, term: str):
        async with self:
            self.members_search = term
            controller = self._controller()
        if await controller.search(term) is None:
            return
        async with self:
            self._sync(controller)

    @rx.event
    def sort_by(self, field: str):
        controller = self._controller()
        controller.sort_by(field)
        self._sync(controller)

    @rx.event
    def go_to_page(self, page: int):
        controller = self._controller()
        controller.go_to_page(int(page))
        self._sync(controller)

    @rx.event
    def next_page(self):
        controller = self._controller()
        controller.next_page()
        self._sync(controller)

    @rx.event
    def previous_page(self):
        controller = self._controller()
        controller.previous_page()
        self._sync(controller)

    @rx.event
    def set_profile_name(self, value: str):
        self.profile_name = value

    @rx.event
    def set_add_open(self, value: bool):
        self.add_open = value
        if value:
            self.new_name = ""
            self.new_email = ""
            self.new_role = MemberRole.USER.value

    @rx.event
    def set_new_name(self, value: str):
        self.new_name = value

    @rx.event
    def set_new_email(self, value: str):
        self.new_email = value

    @rx.event
    def set_new_role(self, value: str):
        self.new_role = value

    @rx.event
    def open_edit(self, member_id: str):
        controller = self._controller()
        member = controller.find(member_id)
        if member is None:
            return rx.toast.error("Membro não encontrado.")
        self.edit_id = member.id
        self.edit_name = member.display_name
        self.edit_role = member.role.value
        self.edit_open = True

    @rx.event
    def set_edit_open(self, value: bool):
        self.edit_open = value

    @rx.event
    def set_edit_name(self, value: str):
        self.edit_name = value

    @rx.event
    def set_edit_role(self, value: str):
        self.edit_role = value

    @rx.event
    def open_delete(self, member_id: str):
        controller = self._controller()
        member = controller.find(member_id)
        if member is None:
            return rx.toast.error("Membro não encontrado.")
        self.delete_id = member.id
        self.delete_label = member.display_name or member.email
        self.delete_open = True

    @rx.event
    def set_delete_open(self, value: bool):
        self.delete_open = value

    @rx.event(background=True)
    async def submit_add(self):
        async with self:
            controller = self._controller()
            name, email, role = self.new_name, self.new_email, self.new_role
            self.busy = True
        feedback = await controller.add_member(name, email, role)
        async with self:
            if feedback.ok:
                self.add_open = False
            self._sync(controller)
        return _toast(feedback)

    @rx.event(background=True)
    async def submit_edit(self):
        async with self:
            controller = self._controller()
            member_id, name, role = self.edit_id, self.edit_name, self.edit_role
            self.busy = True
        feedback = await controller.update_member(member_id, name, role)
        async with self:
            if feedback.ok:
                self.edit_open = False
            self._sync(controller)
        return _toast(feedback)

    @rx.event(background=True)
    async def save_profile(self):
        async with self:
            controller = self._controller()
            name = self.profile_name
            self.busy = True
        feedback = await controller.update_profile(name)
        async with self:
            self._sync(controller)
        return _toast(feedback)

    @rx.event(background=True)
    async def confirm_delete(self):
        async with self:
            controller = self._controller()
            member_id = self.delete_id
            self.busy = True
        feedback = await controller.remove_member(member_id)
        async with self:
            self.delete_open = False
            self.delete_id = ""
            self._sync(controller)
        return _toast(feedback)

    @rx.event(background=True)
    async def resend(self, email: str):
        async with self:
            controller = self._controller()
            self.busy = True
        feedback = await controller.resend_invite_or_reset_password(email)
        async with self:
            self._sync(controller)
        return _toast(feedback)


class PasswordState(AuthState):
    """Send-reset, reset and set-password pages."""

    reset_email: str = ""
    new_password: str = ""
    confirm_password: str = ""
    link_fragment: str = ""
    link_error: str = ""
    message: str = ""
    error: str = ""
    submitting: bool = False
    done: bool = False

    def _password_controller(self) -> PasswordController:
        services = get_services()
        return PasswordController(services.auth, services.settings.app_origin)

    def _reset_form(self) -> None:
        self.new_password = ""
        self.confirm_password = ""
        self.message = ""
        self.error = ""
        self.submitting = False
        self.done = False

    @rx.event
    def set_reset_email(self, value: str):
        self.reset_email = value

    @rx.event
    def set_new_password(self, value: str):
        self.new_password = value

    @rx.event
    def set_confirm_password(self, value: str):
        self.confirm_password = value

    @rx.event
    def read_link(self):
        """Link tokens travel in the URL fragment, which only the browser sees."""
        self._reset_form()
        self.link_fragment = ""
        self.link_error = ""
        return rx.call_script("window.location.hash", callback=PasswordState.receive_fragment)

    @rx.event
    def receive_fragment(self, fragment: str):
        self.link_fragment = fragment or ""
        tokens = parse_link_fragment(self.link_fragment)
        if tokens.error:
            self.link_error = tokens.error
        elif not tokens.access_token and not tokens.refresh_token:
            self.link_error = "Link inválido ou expirado."

    @rx.event
    async def send_reset_email(self):
        self.message = ""
        self.error = ""
        self.submitting = True
        yield
        feedback = await self._password_controller().send_reset_email(self.reset_email)
        self.submitting = False
        if feedback.ok:
            self.message = feedback.message
            self.done = True
        else:
            self.error = feedback.message

    @rx.event
    async def submit_reset(self):
        async for event in self._finish_link(recovery=True):
            yield event

    @rx.event
    async def submit_set_password(self):
        async for event in self._finish_link(recovery=False):
            yield event

    async def _finish_link(self, recovery: bool):
        self.message = ""
        self.error = ""
        self.submitting = True
        yield None
        controller = self._password_controller()
        tokens = parse_link_fragment(self.link_fragment)
        if recovery:
            result = await controller.reset_password(
                tokens, self.new_password, self.confirm_password
            )
        else:
            result = await controller.set_password(
                tokens, self.new_password, self.confirm_password
            )
        self.submitting = False
        if not result.feedback.ok:
            self.error = result.feedback.message
            return
        self.message = result.feedback.message
        self.done = True
        self.new_password = ""
        self.confirm_password = ""
        if result.session is None:
            yield rx.redirect("/")
            return
        session = result.session
        self._store_session(session.access_token, session.refresh_token, session.user)
        yield rx.redirect("/notas")
