"""
Naming helpers
"""


def zip_name_to_human_name(zip_name: str) -> str:
    """
    Turn a zip file name into a readable name.

    Example:
        >>> zip_name_to_human_name('twenty-twenty-four.1.2.zip')
        'Twenty twenty four'
    """
    mixed_case_name = zip_name.split('.')[0].replace('-', ' ')
    return mixed_case_name[:1].upper() + mixed_case_name[1:].lower()
