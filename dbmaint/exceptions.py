def sqlfmt(sql: str):
    return "\n".join("\t\t" + line for line in sql.splitlines())


class ToolException(Exception):
    def __init__(self, message, obj=None):
        self.message = message
        self.obj = obj

    def __str__(self):
        obj_subject = f"{self.obj} : " if self.obj else ""
        return f"{obj_subject}{self.message}"


class ConfigurationError(ToolException):
    def __init__(self, message, property_name: str | None = None):
        self.message = message
        self.obj = None
        self.property_name = property_name

    def __str__(self):
        prop_subject = f"[{self.property_name}] " if self.property_name else ""
        return f"{prop_subject}{self.message}"


class UnknownToolError(ToolException):
    pass


class SessionError(ToolException):
    def __init__(self, message, obj=None, dberror=None):
        self.message = message
        self.obj = obj
        self.dberror = dberror

    def __str__(self):
        base = super().__str__()
        return f"{base}: {self.dberror}" if self.dberror else base


class GenerationError(ToolException):
    def __init__(self, message, obj=None, cause=None):
        self.message = message
        self.obj = obj
        self.cause = cause

    def __str__(self):
        base = super().__str__()
        return f"{base}: {self.cause!r}" if self.cause else base


class StatementError(ToolException):
    def __init__(self, message, dberror, obj, sql):
        self.message = message
        self.dberror = dberror
        self.obj = obj
        self.sql = sql

    def __str__(self):
        return f"""
            While executing:
            {sqlfmt(self.sql)}

            a DB error was raised:
            {self.dberror}

            while we were processing the object:
            {self.obj}

            furthermore:
            {self.message}
        """
