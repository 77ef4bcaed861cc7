"""Login/logout scaffolding for a component.

The markup of the login form and the logout button comes from a
``LoginFormBuilder``; the composite only decides where things go.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Tuple, Type

from tsx_modifier import (
    ASTModifier,
    ConditionalKind,
    ConditionalSpec,
    FunctionSpec,
    InsertJSXSpec,
    InsertPosition,
    ModifierError,
    NodeNotFoundError,
    StateVariableSpec,
)

from .edit_ops import BaseEditOperation
from .errors import CompositeOperationError
from .models import AddAuthenticationOperation

logger = logging.getLogger(__name__)

_INPUT_CLASSES = (
    "w-full px-4 py-2 border border-gray-300 rounded-lg "
    "focus:ring-2 focus:ring-blue-500 focus:border-transparent"
)


class LoginFormBuilder(ABC):
    """Produces the JSX for one login form style."""

    @abstractmethod
    def form(self, include_email: bool) -> str:
        pass

    @abstractmethod
    def logout_button(self) -> str:
        pass


class SimpleLoginForm(LoginFormBuilder):
    def form(self, include_email: bool) -> str:
        lines = ["<div>", "  <h2>Login</h2>", "  <form onSubmit={handleLogin}>"]
        if include_email:
            lines.append(
                '    <input type="email" value={email} onChange={(e) => setEmail(e.target.value)} '
                'placeholder="Email" required />'
            )
        lines += [
            '    <input type="password" value={password} onChange={(e) => setPassword(e.target.value)} '
            'placeholder="Password" required />',
            '    <button type="submit">Login</button>',
            "  </form>",
            "</div>",
        ]
        return "\n".join(lines)

    def logout_button(self) -> str:
        return "<button onClick={handleLogout}>Logout</button>"


class StyledLoginForm(LoginFormBuilder):
    def form(self, include_email: bool) -> str:
        lines = [
            '<div className="min-h-screen flex items-center justify-center bg-gray-100">',
            '  <div className="bg-white p-8 rounded-lg shadow-md w-full max-w-md">',
            '    <h2 className="text-2xl font-bold mb-6 text-center">Login</h2>',
            '    <form onSubmit={handleLogin} className="space-y-4">',
        ]
        if include_email:
            lines.append(
                '      <input type="email" value={email} onChange={(e) => setEmail(e.target.value)} '
                f'placeholder="Email" className="{_INPUT_CLASSES}" required />'
            )
        lines += [
            '      <input type="password" value={password} onChange={(e) => setPassword(e.target.value)} '
            f'placeholder="Password" className="{_INPUT_CLASSES}" required />',
            '      <button type="submit" className="w-full bg-blue-500 text-white py-2 rounded-lg '
            'hover:bg-blue-600 transition-colors">Login</button>',
            "    </form>",
            "  </div>",
            "</div>",
        ]
        return "\n".join(lines)

    def logout_button(self) -> str:
        return (
            '<button onClick={handleLogout} className="mb-4 bg-red-500 text-white px-4 py-2 rounded '
            'hover:bg-red-600 transition-colors">Logout</button>'
        )


LOGIN_FORM_BUILDERS: Dict[str, Type[LoginFormBuilder]] = {
    "simple": SimpleLoginForm,
    "styled": StyledLoginForm,
}


def get_login_form_builder(style: str) -> LoginFormBuilder:
    try:
        return LOGIN_FORM_BUILDERS[style]()
    except KeyError:
        raise ValueError(f"Unknown login form style: {style}") from None


class AddAuthentication(BaseEditOperation):
    """Gate a component behind a login form.

    Steps, all queued on the same modifier:

    1. ``isLoggedIn`` (and ``email`` / ``password``) state
    2. ``handleLogin`` / ``handleLogout`` handlers
    3. login form markup from the selected builder
    4. ``isLoggedIn ? <existing> : (<form>)`` around the returned value
    5. logout button as the first child of the existing JSX root
    """

    operation_type = "AST_ADD_AUTHENTICATION"

    def apply(self, modifier: ASTModifier, op: AddAuthenticationOperation) -> str:
        builder = get_login_form_builder(op.login_form_style)
        include_email = op.include_email_field
        target = op.target_function
        form: List[str] = []

        steps: List[Tuple[str, Callable[[], None]]] = [
            ("state", lambda: self._add_state(modifier, include_email, target)),
            ("handlers", lambda: self._add_handlers(modifier, include_email, target)),
            ("login form", lambda: form.append(builder.form(include_email))),
            ("conditional", lambda: modifier.wrap_in_conditional(
                ConditionalSpec(condition="isLoggedIn", fallback=form[0], kind=ConditionalKind.TERNARY), target
            )),
            ("logout button", lambda: self._add_logout_button(modifier, builder, target)),
        ]

        completed = 0
        for index, (label, step) in enumerate(steps, start=1):
            try:
                step()
            except ModifierError as e:
                logger.debug("Authentication step %d (%s) failed: %s", index, label, e)
                raise CompositeOperationError("Authentication", index, completed, e) from e
            completed += 1

        return "Added authentication system with login/logout"

    @staticmethod
    def _add_state(modifier: ASTModifier, include_email: bool, target):
        modifier.add_state_variable(StateVariableSpec("isLoggedIn", "setIsLoggedIn", "false"), target)
        if include_email:
            modifier.add_state_variable(StateVariableSpec("email", "setEmail", "''"), target)
        modifier.add_state_variable(StateVariableSpec("password", "setPassword", "''"), target)

    @staticmethod
    def _add_handlers(modifier: ASTModifier, include_email: bool, target):
        condition = "email && password" if include_email else "password"
        login_body = "\n".join([
            "e.preventDefault();",
            f"if ({condition}) {{",
            "  setIsLoggedIn(true);",
            "}",
        ])
        logout_body = ["setIsLoggedIn(false);"]
        if include_email:
            logout_body.append("setEmail('');")
        logout_body.append("setPassword('');")

        modifier.add_function(FunctionSpec(name="handleLogin", body=login_body, params=["e"]), target)
        modifier.add_function(FunctionSpec(name="handleLogout", body="\n".join(logout_body)), target)

    @staticmethod
    def _add_logout_button(modifier: ASTModifier, builder: LoginFormBuilder, target):
        match = modifier.parser.find_component_function(modifier.tree, target)
        root = modifier.parser.find_return_jsx(match.node) if match is not None else None
        if root is None:
            raise NodeNotFoundError("returned JSX root in", target or "component")
        modifier.insert_jsx(root, InsertJSXSpec(jsx=builder.logout_button(), position=InsertPosition.INSIDE_START))
