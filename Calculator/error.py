

class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class InvalidCharacterError(MathError):
    pass

class MalformedNumberError(MathError):
    pass

class UnknownIdentifierError(MathError):
    def __init__(self, name, code="3032", equation=None):
        super().__init__(f"Unknown identifier: '{name}'", code=code, equation=equation)
        self.name = name

class UnmatchedParenthesisError(MathError):
    pass

class SyntaxError(MathError):
    pass

class TrailingInputError(SyntaxError):
    pass

class MathDomainError(MathError):
    pass










Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3008" : "More than one '.' in one number.",
    "3009" : "Missing ')'. ",
    "3011" : "Unexpected Token: ", # + Token
    "3023" : "Missing '(' after function: ", # + function name
    "3027" : "Missing Number.",
    "3029" : "Missing Number after operator: ", # + operator
    "3030" : "Invalid character: ", # + character
    "3031" : "Number without digits.",
    "3032" : "Unknown identifier: ", # + name
    "3033" : "Unexpected input after the expression: ", # + token
    "3034" : "Expression is nested too deeply.",
    "3035" : "Result is not a finite number.",
    "3036" : "Constant used as a function: ", # + name
    "3217" : "Missing ')' after function",


    "4501" : "Not all Settings could be saved: ", # + Error raising setting


    "9999" : "Unexpected Error: " #+error
}
