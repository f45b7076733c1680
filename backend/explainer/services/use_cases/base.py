"""
Base use case class.

Each use case wraps one business operation behind `execute()` and knows
nothing about HTTP; routes translate requests in and errors out.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Base use case abstract class.

    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            Domain exceptions from explainer.core.exceptions. HTTP exceptions
            should NOT be raised here; converting them is the route's job.
        """
        pass
