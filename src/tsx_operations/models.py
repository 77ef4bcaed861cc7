"""Operation request and result models.

Requests arrive as JSON objects with camelCase keys and a ``type``
discriminator; both the camelCase aliases and the snake_case field names
are accepted.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from tsx_modifier import (
    CallbackSpec,
    ClassNameSpec,
    ClassNameTemplate,
    ImportSpec,
    MemoSpec,
    ReducerAction,
    ReducerSpec,
    RefSpec,
    StateVariableSpec,
    UseEffectSpec,
)


class OperationModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportModel(OperationModel):
    source: str
    default_import: Optional[str] = None
    named_imports: List[str] = Field(default_factory=list)
    namespace_import: Optional[str] = None

    def to_spec(self) -> ImportSpec:
        return ImportSpec(
            source=self.source,
            default_import=self.default_import,
            named_imports=list(self.named_imports),
            namespace_import=self.namespace_import,
        )


# Edit-existing operations


class WrapElementOperation(OperationModel):
    type: Literal["AST_WRAP_ELEMENT"] = "AST_WRAP_ELEMENT"
    target_element: str
    wrapper_component: str
    wrapper_props: Optional[Dict[str, Optional[str]]] = None
    import_: Optional[ImportModel] = Field(default=None, alias="import")


class AddStateOperation(OperationModel):
    type: Literal["AST_ADD_STATE"] = "AST_ADD_STATE"
    name: str
    setter: str
    initial_value: str
    value_type: Optional[str] = None
    target_function: Optional[str] = None

    def to_spec(self) -> StateVariableSpec:
        return StateVariableSpec(name=self.name, setter=self.setter, initial_value=self.initial_value,
                                 type_annotation=self.value_type)


class AddImportOperation(ImportModel):
    type: Literal["AST_ADD_IMPORT"] = "AST_ADD_IMPORT"


class ClassNameTemplateModel(OperationModel):
    variable: str
    true_value: str
    false_value: str = ""
    operator: Literal["?", "&&"] = "?"


class ModifyClassNameOperation(OperationModel):
    type: Literal["AST_MODIFY_CLASSNAME"] = "AST_MODIFY_CLASSNAME"
    target_element: str
    static_classes: List[str] = Field(default_factory=list)
    template: Optional[ClassNameTemplateModel] = None
    raw_template: Optional[str] = None

    def to_spec(self) -> ClassNameSpec:
        template = None
        if self.template is not None:
            template = ClassNameTemplate(**self.template.model_dump())
        return ClassNameSpec(static_classes=list(self.static_classes), template=template,
                             raw_template=self.raw_template)


class InsertJSXOperation(OperationModel):
    type: Literal["AST_INSERT_JSX"] = "AST_INSERT_JSX"
    target_element: str
    jsx: str
    position: Literal["before", "after", "inside_start", "inside_end"]


class AddUseEffectOperation(OperationModel):
    type: Literal["AST_ADD_USEEFFECT"] = "AST_ADD_USEEFFECT"
    body: str
    dependencies: Optional[List[str]] = None
    cleanup: Optional[str] = None
    target_function: Optional[str] = None

    def to_spec(self) -> UseEffectSpec:
        return UseEffectSpec(body=self.body, dependencies=self.dependencies, cleanup=self.cleanup)


class ModifyPropOperation(OperationModel):
    type: Literal["AST_MODIFY_PROP"] = "AST_MODIFY_PROP"
    target_element: str
    prop_name: str
    prop_value: Optional[str] = None
    action: Literal["add", "update", "remove"]


class AddAuthenticationOperation(OperationModel):
    type: Literal["AST_ADD_AUTHENTICATION"] = "AST_ADD_AUTHENTICATION"
    login_form_style: Literal["simple", "styled"] = "styled"
    include_email_field: bool = True
    target_function: Optional[str] = None


class AddRefOperation(OperationModel):
    type: Literal["AST_ADD_REF"] = "AST_ADD_REF"
    name: str
    initial_value: str = "null"
    value_type: Optional[str] = None
    target_function: Optional[str] = None

    def to_spec(self) -> RefSpec:
        return RefSpec(name=self.name, initial_value=self.initial_value, type_annotation=self.value_type)


class AddMemoOperation(OperationModel):
    type: Literal["AST_ADD_MEMO"] = "AST_ADD_MEMO"
    name: str
    computation: str
    dependencies: List[str] = Field(default_factory=list)
    target_function: Optional[str] = None

    def to_spec(self) -> MemoSpec:
        return MemoSpec(name=self.name, computation=self.computation, dependencies=list(self.dependencies))


class AddCallbackOperation(OperationModel):
    type: Literal["AST_ADD_CALLBACK"] = "AST_ADD_CALLBACK"
    name: str
    params: List[str] = Field(default_factory=list)
    body: str
    dependencies: List[str] = Field(default_factory=list)
    target_function: Optional[str] = None

    def to_spec(self) -> CallbackSpec:
        return CallbackSpec(name=self.name, body=self.body, params=list(self.params),
                            dependencies=list(self.dependencies))


class ReducerActionModel(OperationModel):
    type: str
    handler: str


class AddReducerOperation(OperationModel):
    type: Literal["AST_ADD_REDUCER"] = "AST_ADD_REDUCER"
    name: str
    dispatch_name: str = "dispatch"
    reducer_name: str = "reducer"
    initial_state: str
    actions: List[ReducerActionModel] = Field(default_factory=list)
    target_function: Optional[str] = None

    def to_spec(self) -> ReducerSpec:
        return ReducerSpec(
            name=self.name,
            dispatch_name=self.dispatch_name,
            reducer_name=self.reducer_name,
            initial_state=self.initial_state,
            actions=[ReducerAction(type=a.type, handler=a.handler) for a in self.actions],
        )


# Originate-new operations


class ContextStateVariable(OperationModel):
    name: str
    initial_value: str
    type: Optional[str] = None


class AddContextProviderOperation(OperationModel):
    type: Literal["AST_ADD_CONTEXT_PROVIDER"] = "AST_ADD_CONTEXT_PROVIDER"
    context_name: str
    provider_name: Optional[str] = None
    hook_name: Optional[str] = None
    initial_value: str
    value_type: Optional[str] = None
    include_state: bool = True
    state_variables: List[ContextStateVariable] = Field(default_factory=list)


class StoreActionParam(OperationModel):
    name: str
    type: Optional[str] = None


class StoreAction(OperationModel):
    name: str
    params: List[StoreActionParam] = Field(default_factory=list)
    body: str


class AddZustandStoreOperation(OperationModel):
    type: Literal["AST_ADD_ZUSTAND_STORE"] = "AST_ADD_ZUSTAND_STORE"
    store_name: str
    store_file: Optional[str] = None
    initial_state: Dict[str, Any]
    actions: List[StoreAction] = Field(default_factory=list)
    persist: bool = False
    persist_key: Optional[str] = None


class ExtractComponentOperation(OperationModel):
    type: Literal["AST_EXTRACT_COMPONENT"] = "AST_EXTRACT_COMPONENT"
    target_jsx: str = Field(alias="targetJSX")
    component_name: str
    component_file: Optional[str] = None
    extract_props: bool = True
    prop_types: Optional[Dict[str, str]] = None


ASTOperation = Annotated[
    Union[
        WrapElementOperation,
        AddStateOperation,
        AddImportOperation,
        ModifyClassNameOperation,
        InsertJSXOperation,
        AddUseEffectOperation,
        ModifyPropOperation,
        AddAuthenticationOperation,
        AddRefOperation,
        AddMemoOperation,
        AddCallbackOperation,
        AddReducerOperation,
        AddContextProviderOperation,
        AddZustandStoreOperation,
        ExtractComponentOperation,
    ],
    Field(discriminator="type"),
]

operation_adapter: TypeAdapter[ASTOperation] = TypeAdapter(ASTOperation)


class ExecutionResult(BaseModel):
    success: bool
    code: Optional[str] = None
    errors: Optional[List[str]] = None
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
