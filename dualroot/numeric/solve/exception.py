
# ======================================================================

class SolverError(RuntimeError):
    """
    Raised when a solver fails to converge on a root and the caller has
    asked for failures to be escalated (e.g. ``newton(..., disp=True)``).
    Information about the last state of the solver is attached so that
    the reason for the failure can be examined.

    Notes
    -----
    Flags used by the solvers in this package:

        - 1: Iteration limit (`patience`) reached.
        - 2: Estimate became non-finite (e.g. zero derivative).
    """

    def __init__(self, *args, flag: int = None, details: str = None,
                 **kwargs):
        """
        Parameters
        ----------
        args :
            Passed to `RuntimeError`.
        flag : int, default = None
            Numeric status code.  ``flag == 0`` is reserved for success
            so a `SolverError` normally has ``flag != 0``.
        details : str, default = None
            Description of the specific type of failure.
        kwargs :
            Solver state (e.g. `guess`, `last`, `iterations`) added as
            attributes of the exception.
        """
        super().__init__(*args)
        self.flag, self.details = flag, details
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        # Solver state is listed below the main message.
        lines = [super().__str__()]
        lines += [f"{k} -> {v}" for k, v in vars(self).items()
                  if v is not None]
        return '\n'.join(lines)
