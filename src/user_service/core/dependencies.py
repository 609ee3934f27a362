from fastapi import Request

from user_service.program.user_program import UserProgram


def get_user_program(request: Request) -> UserProgram:
    # Built once by create_app(); tests swap it through app.dependency_overrides
    return request.app.state.user_program
