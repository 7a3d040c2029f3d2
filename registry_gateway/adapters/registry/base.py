from abc import ABC, abstractmethod

from registry_gateway.schemas.document import Document


class AbstractRegistryClient(ABC):
	"""Interface for clients that deliver signed documents to the registry."""

	@abstractmethod
	def submit(self, document: Document, signature: str) -> str:
		"""Submit one signed document.

		Args:
			document: Document metadata to register.
			signature: Caller-supplied signature of the document.

		Returns:
			str: Registry response body, verbatim.

		Raises:
			RegistryApiError: If the registry answers with a non-2xx status.
			RegistryTransportError: If no response could be obtained.
		"""
		...

	def close(self) -> None:
		"""Release network resources. Default: nothing to release."""
