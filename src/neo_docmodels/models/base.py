"""
Base document model.

``BaseModel`` holds attribute values for one document, gates writes to
unsafe attributes once the document exists, validates values against the
rules declared by the model's schema and saves/loads documents through a
``DocumentStore``.
"""
import logging
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Union

from ..config.settings import get_store_settings
from ..core.exceptions import StoreError, StoreReadError
from ..store.connection import get_store
from ..store.protocols import DocumentStore
from .filters import get_filter
from .schema import ModelSchema, Rule, SchemaProvider
from .validators import ValidatorRegistry, validate_field as check_field

logger = logging.getLogger(__name__)

ID_FIELD = "_id"
REVISION_FIELD = "_rev"
IDENTITY_SOURCE = "realty_id"


class ModelState(str, Enum):
    """Lifecycle states of a model instance."""
    NEW = "new"
    LOADED = "loaded"
    SAVED = "saved"
    FAILED = "failed"


class BaseModel:
    """Base class for document models.

    Subclasses declare their schema either by assigning a ``ModelSchema`` to
    ``schema`` or by overriding the schema methods::

        class Realty(BaseModel):
            schema = ModelSchema(
                attributes=("realty_id", "title"),
                validation_rules=((["title"], {"required": {}}),),
                unsafe=("realty_id",),
            )

        realty = Realty({"realty_id": "7", "title": "House"})
        await realty.save()
    """

    schema: ClassVar[SchemaProvider] = ModelSchema()

    def __init__(
        self,
        attributes: Optional[Mapping[str, Any]] = None,
        store: Optional[DocumentStore] = None,
    ):
        """Initialize model.

        Args:
            attributes: Initial attribute values; undeclared names are ignored
            store: Document store, defaults to the process-wide store

        Raises:
            RuleDeclarationError: If the schema declares a malformed rule
        """
        self.errors: Dict[str, str] = {}
        self._attributes: Dict[str, Any] = {}
        self._dynamic_attributes: Dict[str, Any] = {}
        self._unsafe_attributes: List[str] = []
        self._is_new_model = True
        self._id: Optional[str] = None
        self._state = ModelState.NEW
        self._store = store

        self.set_default_values()
        self.attributes = attributes or {}
        self._validators = ValidatorRegistry(self.attributes_list())
        self._validators.register_rules(self.rules(), self.class_name)
        self.set_unsafe_attributes()

    # Schema declaration

    def attributes_list(self) -> List[str]:
        """Returns attributes list."""
        return self.schema.attributes_list()

    def default_values(self) -> Dict[str, Any]:
        """Default attribute values."""
        return self.schema.default_values()

    def rules(self) -> List[Rule]:
        """Validation rules."""
        return self.schema.rules()

    def unsafe_attributes_list(self) -> List[str]:
        """Unsafe attributes, which can not change once the document exists."""
        return self.schema.unsafe_attributes_list()

    def filters(self) -> Dict[str, List[str]]:
        """Attribute filters: ``strip_tags`` and ``numeric``."""
        return self.schema.filters()

    # Attribute store

    def set_default_values(self) -> None:
        for name, value in self.default_values().items():
            self.set(name, value)

    @property
    def attributes(self) -> Dict[str, Any]:
        """Returns attributes {name: value}."""
        return self._attributes

    @attributes.setter
    def attributes(self, attributes: Optional[Mapping[str, Any]]) -> None:
        for name in self.attributes_list():
            if attributes and name in attributes:
                self.set(name, attributes[name])

    def get(self, name: str) -> Any:
        """Returns a declared attribute value."""
        if name in self.attributes_list():
            return self._attributes.get(name)
        return None

    def set(self, name: str, value: Any, is_dynamic: bool = False) -> bool:
        """Set attribute value.

        Args:
            name: Attribute name
            value: Attribute value
            is_dynamic: Store a value outside the declared attributes, or
                write a declared attribute past the unsafe-attribute check

        Returns:
            True if the value was written, False if the write was rejected
        """
        if name in self.attributes_list():
            if is_dynamic or self.is_safe_attribute(name):
                self._attributes[name] = value
                return True
            logger.debug(f"{self.class_name}: rejected write to unsafe attribute {name}")
            return False

        if is_dynamic:
            self._dynamic_attributes[name] = value
            return True

        logger.debug(f"{self.class_name}: rejected write to undeclared attribute {name}")
        return False

    def get_dynamic(self, name: str) -> Any:
        """Returns a dynamic attribute value."""
        return self._dynamic_attributes.get(name)

    def to_document(self) -> Dict[str, Any]:
        """Returns the document handed to the store."""
        document = dict(self._attributes)
        document.update(self._dynamic_attributes)
        return document

    # Safety gate

    def set_unsafe_attributes(self) -> None:
        for name in self.unsafe_attributes_list():
            if name not in self._unsafe_attributes:
                self._unsafe_attributes.append(name)

    @property
    def unsafe_attributes(self) -> List[str]:
        return self._unsafe_attributes

    def add_unsafe_attribute(self, attribute: Union[str, Sequence[str]]) -> None:
        """Add one unsafe attribute or a list of them."""
        names = [attribute] if isinstance(attribute, str) else list(attribute)
        for name in names:
            if name not in self._unsafe_attributes:
                self._unsafe_attributes.append(name)

    def is_safe_attribute(self, name: str) -> bool:
        """Unsafe attributes can not be written once the document exists."""
        if self._is_new_model or not self._unsafe_attributes:
            return True
        return name not in self._unsafe_attributes

    # Validator registry

    @property
    def validators(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Returns attribute validators {name: {kind: params}}."""
        return self._validators.validators

    def get_validator(self, name: str) -> Optional[Dict[str, Dict[str, Any]]]:
        return self._validators.get(name)

    def add_validator(self, name: str, validator: Mapping[str, Any]) -> "BaseModel":
        """Add a ``{kind: params}`` validator to a declared attribute."""
        self._validators.add(name, validator)
        return self

    def remove_validator(self, name: str, kind: Optional[str] = None) -> "BaseModel":
        """Remove attribute validator.

        Args:
            name: Attribute name
            kind: Validator kind; all validators are removed when omitted
        """
        self._validators.remove(name, kind)
        return self

    # Validation

    def add_error(self, attribute: str, error: str = "") -> None:
        self.errors[attribute] = error

    def clear_errors(self) -> None:
        self.errors = {}

    def validate_field(self, name: str, validator: Mapping[str, Any]) -> bool:
        """Validate an attribute against one ``{kind: params}`` validator."""
        messages = check_field(name, self._attributes.get(name), validator)
        for message in messages:
            self.add_error(name, message)
        return not messages

    def validate(self) -> bool:
        """Validates model attributes.

        Errors from earlier calls are kept; call ``clear_errors`` to start over.
        """
        for name in self.attributes_list():
            for kind, params in list((self.get_validator(name) or {}).items()):
                self.validate_field(name, {kind: params})

        return not self.errors

    # Lifecycle

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def class_name(self) -> str:
        return type(self).__name__

    @property
    def is_new_model(self) -> bool:
        return self._is_new_model

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = get_store()
        return self._store

    def build_id(self) -> str:
        """Document id derived from the class name and ``realty_id``."""
        return f"{self.class_name.lower()}-{self.get(IDENTITY_SOURCE)}"

    def apply_filters(self) -> None:
        for kind, names in self.filters().items():
            filter_func = get_filter(kind)
            if filter_func is None:
                logger.debug(f"{self.class_name}: unknown filter {kind}")
                continue

            for name in names:
                value = self.get(name)
                if value:
                    self.set(name, filter_func(value))

    def before_save(self) -> None:
        """Calls before model save. Subclasses must call ``super().before_save()``."""
        if not self._is_new_model:
            for name in self._unsafe_attributes:
                self.remove_validator(name)

        self.apply_filters()

        if self._is_new_model or self._id is None:
            self._id = self.build_id()
        self.set(ID_FIELD, self._id, is_dynamic=True)

    async def find_by_id(self, document_id: str) -> "BaseModel":
        """Load the document with the given id into this model.

        Raises:
            StoreReadError: If the store fails to return the document
        """
        try:
            records = await self.store.get(document_id)
        except StoreError as e:
            logger.error(f"{self.class_name}: failed to load {document_id}: {e}")
            if isinstance(e, StoreReadError):
                raise
            raise StoreReadError(document_id, str(e)) from e

        record = records[0] if records else None
        if record:
            self._attributes = {}
            for name in self.attributes_list():
                if name in record:
                    self._attributes[name] = record[name]

            self._id = record.get(ID_FIELD) or document_id
            self._dynamic_attributes[ID_FIELD] = self._id
            if record.get(REVISION_FIELD):
                self._dynamic_attributes[REVISION_FIELD] = record[REVISION_FIELD]

            self._is_new_model = False
            self._state = ModelState.LOADED
        else:
            logger.debug(f"{self.class_name}: document {document_id} not found")
            self._attributes = {}
            self._dynamic_attributes.pop(ID_FIELD, None)
            self._dynamic_attributes.pop(REVISION_FIELD, None)
            self._id = None
            self._is_new_model = True
            self._state = ModelState.NEW

        return self

    async def save(self, validate: bool = True) -> Any:
        """Saves model into the document store.

        Args:
            validate: Run validation before writing

        Returns:
            Store result, or None if validation or the write failed
        """
        self.before_save()

        if validate:
            self.clear_errors()
            if not self.validate():
                logger.debug(f"{self.class_name}: validation failed: {self.errors}")
                self._state = ModelState.FAILED
                return None

        try:
            result = await self.store.insert(self.to_document())
        except StoreError as e:
            logger.error(f"{self.class_name}: failed to save {self._id}: {e}")
            self.add_error(get_store_settings().store_error_key, e.message)
            self._state = ModelState.FAILED
            return None

        if isinstance(result, Mapping) and result.get("rev"):
            self._dynamic_attributes[REVISION_FIELD] = result["rev"]

        self._is_new_model = False
        self._state = ModelState.SAVED
        return result

    def __repr__(self) -> str:
        return f"{self.class_name}(id={self._id!r}, attributes={self._attributes!r})"
