class SRTError(Exception):
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return self.msg


class SRTLoginError(SRTError):
    def __init__(self, msg="Login failed, please check ID/PW"):
        super().__init__(msg)


class SRTResponseError(SRTError):
    pass


class SRTDuplicateError(SRTResponseError):
    pass


class SRTNotLoggedInError(SRTError):
    def __init__(self, msg="Not logged in"):
        super().__init__(msg)
