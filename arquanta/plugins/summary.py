import strax

export, __all__ = strax.exporter()


@export
class DepositSummary(strax.MergeOnlyPlugin):
    """MergeOnlyPlugin that summarizes the energy deposits, the electric field
    and the quanta into a single output."""

    depends_on = (
        "energy_deposits",
        "electric_field_values",
        "quanta",
    )
    rechunk_on_save = False
    save_when = strax.SaveWhen.ALWAYS
    provides = "deposit_summary"
    __version__ = "0.1.0"
