from enum import Enum


class FunctionType(Enum):
    POWER = "power_function"
    SIGMOID = "sigmoid_function"
    SWAPPER = "swapper_function"

    @classmethod
    def from_str(cls, type_str: str) -> "FunctionType":
        """
        Convert a string to a FunctionType enum.
        Accepts either the member value ("power_function") or its name ("POWER").
        :param type_str: str
        :return: FunctionType or NotImplementedError
        """
        for member in cls:
            if type_str.lower() == member.value or type_str.upper() == member.name:
                return member
        raise NotImplementedError(f"No function type enum for {type_str}")

    @property
    def is_curve(self) -> bool:
        """True for the function types that define a price and an integral."""
        return self in (FunctionType.POWER, FunctionType.SIGMOID)

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()
